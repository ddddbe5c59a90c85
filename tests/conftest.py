"""Shared fixtures: a fake upstream serving all three providers."""

from datetime import datetime, timezone

import pytest
from aiohttp import web

from api import create_app
from fetchers import ContestFetcher
from utils import TimeWindow

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)
NOW_UNIX = int(NOW.timestamp())
DAY = 86400


def codeforces_payload():
    return {
        'status': 'OK',
        'result': [
            {'id': 2100, 'name': 'Codeforces Round 1020', 'phase': 'BEFORE',
             'startTimeSeconds': NOW_UNIX + DAY, 'durationSeconds': 7200},
            {'id': 2101, 'name': 'Educational Round 180', 'phase': 'BEFORE',
             'startTimeSeconds': NOW_UNIX + 3600, 'durationSeconds': 8100},
            {'id': 2099, 'name': 'Codeforces Round 1019', 'phase': 'CODING',
             'startTimeSeconds': NOW_UNIX - 600, 'durationSeconds': 7200},
            {'id': 2050, 'name': 'Codeforces Round 1000', 'phase': 'FINISHED',
             'startTimeSeconds': NOW_UNIX - 30 * DAY, 'durationSeconds': 7200},
            {'id': 1500, 'name': 'Codeforces Round 700', 'phase': 'FINISHED',
             'startTimeSeconds': NOW_UNIX - 1000 * DAY, 'durationSeconds': 7200},
        ],
    }


def leetcode_payload():
    return {
        'data': {
            'allContests': [
                {'title': 'Weekly Contest 450', 'titleSlug': 'weekly-contest-450',
                 'startTime': NOW_UNIX + DAY, 'duration': 5400},
                {'title': 'Biweekly Contest 160', 'titleSlug': 'biweekly-contest-160',
                 'startTime': NOW_UNIX + 7200, 'duration': 5400},
                {'title': 'Weekly Contest 400', 'titleSlug': 'weekly-contest-400',
                 'startTime': NOW_UNIX - 60 * DAY, 'duration': 5400},
                {'title': 'Weekly Contest 100', 'titleSlug': 'weekly-contest-100',
                 'startTime': NOW_UNIX - 1000 * DAY, 'duration': 5400},
            ],
        },
    }


def codechef_payload():
    return {
        'status': 'success',
        'future_contests': [
            {'contest_code': 'START190', 'contest_name': 'Starters 190',
             'contest_start_date': '04 Jun 2025  20:00:00',
             'contest_end_date': '04 Jun 2025  22:00:00',
             'contest_start_date_iso': '2025-06-04T20:00:00+05:30',
             'contest_end_date_iso': '2025-06-04T22:00:00+05:30'},
            # Same start as the Codeforces and LeetCode day-ahead contests
            {'contest_code': 'START191', 'contest_name': 'Starters 191',
             'contest_start_date': '02 Jun 2025  05:30:00',
             'contest_end_date': '02 Jun 2025  08:15:30'},
        ],
        'past_contests': [
            {'contest_code': 'START180', 'contest_name': 'Starters 180',
             'contest_start_date_iso': '2025-04-30T20:00:00+05:30',
             'contest_end_date_iso': '2025-04-30T22:00:00+05:30'},
            {'contest_code': 'START10', 'contest_name': 'Starters 10',
             'contest_start_date_iso': '2022-01-05T20:00:00+05:30',
             'contest_end_date_iso': '2022-01-05T23:00:00+05:30'},
        ],
    }


@pytest.fixture()
def upstream_state():
    """Per-provider (status, payload) pairs plus a request counter."""
    return {
        'codeforces': (200, codeforces_payload()),
        'leetcode': (200, leetcode_payload()),
        'codechef': (200, codechef_payload()),
        'hits': [],
    }


@pytest.fixture()
async def upstream(aiohttp_server, upstream_state):
    """Fake provider APIs served from one local aiohttp app."""

    def provider(name):
        async def handler(request):
            upstream_state['hits'].append(name)
            status, payload = upstream_state[name]
            if isinstance(payload, str):
                return web.Response(status=status, text=payload, content_type='text/html')
            return web.json_response(payload, status=status)
        return handler

    app = web.Application()
    app.router.add_get('/api/contest.list', provider('codeforces'))
    app.router.add_post('/graphql', provider('leetcode'))
    app.router.add_get('/api/list/contests/all', provider('codechef'))
    return await aiohttp_server(app)


@pytest.fixture()
def make_fetcher(upstream):
    def factory(window=TimeWindow.UPCOMING):
        return ContestFetcher(
            window=window,
            clock=lambda: NOW,
            codeforces_url=str(upstream.make_url('/api/contest.list')),
            leetcode_url=str(upstream.make_url('/graphql')),
            codechef_url=str(upstream.make_url('/api/list/contests/all')),
        )
    return factory


@pytest.fixture()
def fetcher(make_fetcher):
    return make_fetcher()


@pytest.fixture()
async def client(aiohttp_client, fetcher):
    return await aiohttp_client(create_app(fetcher))
