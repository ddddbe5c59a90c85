"""
Response envelopes and tool functions shared by the HTTP and MCP servers
"""

import json
import logging

from fetchers import ContestFetcher
from models import Contest, Platform
from utils import TimeWindow

logger = logging.getLogger(__name__)

WINDOW_HINT = '(?window=upcoming|past, past covers the last two years)'

ENDPOINTS = {
    '/contests': f'Get contests from Codeforces, LeetCode, and CodeChef {WINDOW_HINT}',
    '/contests/codeforces': f'Get Codeforces contests {WINDOW_HINT}',
    '/contests/leetcode': f'Get LeetCode contests {WINDOW_HINT}',
    '/contests/codechef': f'Get CodeChef contests {WINDOW_HINT}',
}


def index_payload() -> dict:
    """Static capability listing"""
    return {
        'message': 'Coding Contests API',
        'endpoints': dict(ENDPOINTS),
    }


def contests_envelope(contests: list[Contest]) -> dict:
    data = [contest.to_dict() for contest in contests]
    return {
        'status': 'success',
        'count': len(data),
        'data': data,
    }


def error_envelope(error: Exception) -> dict:
    return {
        'status': 'error',
        'message': str(error),
    }


async def load_contests(fetcher: ContestFetcher, platform: Platform = None) -> dict:
    """Fetch one platform (or all of them) and wrap the result in an envelope"""
    if platform is None:
        contests = await fetcher.fetch_all()
    else:
        contests = await fetcher.fetch_platform(platform)
    return contests_envelope(contests)


async def fetch_contests_tool(
    platform: str = "",
    window: str = "",
    fetcher: ContestFetcher = None,
) -> str:
    """
    Fetch coding contests from LeetCode, CodeChef, and Codeforces

    Args:
        platform: Filter by platform (codeforces, leetcode, codechef). Leave empty for all.
        window: "upcoming" or "past" (last two years). Leave empty for the server default.
    """
    fetcher = fetcher or ContestFetcher()
    fetcher = fetcher.with_window(TimeWindow.parse(window, fetcher.window))

    try:
        selected = Platform.from_slug(platform) if platform.strip() else None
        envelope = await load_contests(fetcher, selected)
    except Exception as e:
        logger.exception("Error serving fetch_contests tool")
        envelope = error_envelope(e)

    return json.dumps(envelope, indent=2)
