"""
Contest fetchers for different platforms
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable

import aiohttp

from config import CODEFORCES_API_URL, LEETCODE_API_URL, CODECHEF_API_URL, CONTEST_WINDOW
from models import Contest, Platform
from utils import (
    TimeWindow,
    duration_between,
    format_duration,
    parse_codechef_date,
    to_iso,
    unix_to_iso,
    utc_now,
)

logger = logging.getLogger(__name__)

LEETCODE_QUERY = """
query getContestList {
    allContests {
        title
        startTime
        duration
        titleSlug
    }
}
"""

HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
    'Accept': 'application/json',
}


class UpstreamError(Exception):
    """A provider could not be reached or answered with an error status"""


class MalformedPayload(UpstreamError):
    """A provider answered, but not in the shape we expect"""


def parse_codeforces(payload, window: TimeWindow, now: datetime) -> list[Contest]:
    """Validate a ``contest.list`` response and map it to contests"""
    if not isinstance(payload, dict) or payload.get('status') != 'OK':
        status = payload.get('status') if isinstance(payload, dict) else None
        raise MalformedPayload(f"Codeforces returned status {status!r}")

    result = payload.get('result')
    if not isinstance(result, list):
        raise MalformedPayload("Codeforces response has no result list")

    phase = 'BEFORE' if window is TimeWindow.UPCOMING else 'FINISHED'
    contests = []
    for entry in result:
        try:
            if entry['phase'] != phase:
                continue
            start = int(entry['startTimeSeconds'])
            if window is TimeWindow.PAST and not window.contains(start, now):
                continue
            duration_seconds = int(entry['durationSeconds'])

            contests.append(Contest(
                platform=Platform.CODEFORCES,
                name=entry['name'],
                start_time_unix=start,
                start_time=unix_to_iso(start),
                duration_seconds=duration_seconds,
                duration=format_duration(duration_seconds),
                url=f"https://codeforces.com/contests/{entry['id']}",
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayload(f"Unexpected Codeforces contest entry: {e!r}") from e

    return contests


def parse_leetcode(payload, window: TimeWindow, now: datetime) -> list[Contest]:
    """Validate an ``allContests`` GraphQL response and map it to contests"""
    try:
        all_contests = payload['data']['allContests']
    except (KeyError, TypeError) as e:
        raise MalformedPayload(f"LeetCode response has no allContests: {e!r}") from e
    if not isinstance(all_contests, list):
        raise MalformedPayload("LeetCode allContests is not a list")

    contests = []
    for entry in all_contests:
        try:
            start = int(entry['startTime'])
            if not window.contains(start, now):
                continue
            duration_seconds = int(entry['duration'])

            contests.append(Contest(
                platform=Platform.LEETCODE,
                name=entry['title'],
                start_time_unix=start,
                start_time=unix_to_iso(start),
                duration_seconds=duration_seconds,
                duration=format_duration(duration_seconds),
                url=f"https://leetcode.com/contest/{entry['titleSlug']}",
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayload(f"Unexpected LeetCode contest entry: {e!r}") from e

    return contests


def _codechef_date(entry: dict, field: str) -> datetime:
    # Prefer the ISO variant, it carries the +05:30 offset explicitly
    return parse_codechef_date(entry.get(f'{field}_iso') or entry[field])


def parse_codechef(payload, window: TimeWindow, now: datetime) -> list[Contest]:
    """Validate a contest listing response and map the window's list to contests"""
    key = 'future_contests' if window is TimeWindow.UPCOMING else 'past_contests'
    entries = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise MalformedPayload(f"CodeChef response has no {key} list")

    contests = []
    for entry in entries:
        try:
            start = _codechef_date(entry, 'contest_start_date')
            end = _codechef_date(entry, 'contest_end_date')
            start_unix = int(start.timestamp())
            if window is TimeWindow.PAST and not window.contains(start_unix, now):
                continue

            contests.append(Contest(
                platform=Platform.CODECHEF,
                name=entry['contest_name'],
                code=entry['contest_code'],
                start_time_unix=start_unix,
                start_time=to_iso(start),
                end_time=to_iso(end),
                duration=duration_between(start, end),
                url=f"https://www.codechef.com/{entry['contest_code']}",
            ))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedPayload(f"Unexpected CodeChef contest entry: {e!r}") from e

    return contests


class ContestFetcher:
    """Fetches contests from various platforms"""

    def __init__(
        self,
        window: TimeWindow = None,
        clock: Callable[[], datetime] = utc_now,
        codeforces_url: str = CODEFORCES_API_URL,
        leetcode_url: str = LEETCODE_API_URL,
        codechef_url: str = CODECHEF_API_URL,
    ):
        self.window = window or TimeWindow.parse(CONTEST_WINDOW)
        self.clock = clock
        self.codeforces_url = codeforces_url
        self.leetcode_url = leetcode_url
        self.codechef_url = codechef_url

    def with_window(self, window: TimeWindow) -> 'ContestFetcher':
        """Return a fetcher for another window, sharing URLs and clock"""
        if window is self.window:
            return self
        return ContestFetcher(
            window=window,
            clock=self.clock,
            codeforces_url=self.codeforces_url,
            leetcode_url=self.leetcode_url,
            codechef_url=self.codechef_url,
        )

    async def _request_json(self, method: str, url: str, **kwargs):
        async with aiohttp.ClientSession(headers=HEADERS) as session:
            async with session.request(method, url, **kwargs) as response:
                if response.status != 200:
                    raise UpstreamError(f"{url} answered HTTP {response.status}")
                # Some providers label JSON as text/html
                return await response.json(content_type=None)

    async def _guarded(self, platform: Platform, fetch, parse) -> list[Contest]:
        try:
            payload = await fetch()
            contests = parse(payload, self.window, self.clock())
        except (UpstreamError, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"Error fetching {platform.value} contests: {e}")
            return []
        except Exception:
            logger.exception(f"Unexpected error fetching {platform.value} contests")
            return []

        logger.info(f"Fetched {len(contests)} {self.window.value} {platform.value} contest(s)")
        return contests

    async def fetch_codeforces(self) -> list[Contest]:
        """Fetch contests from Codeforces"""
        return await self._guarded(
            Platform.CODEFORCES,
            lambda: self._request_json('GET', self.codeforces_url),
            parse_codeforces,
        )

    async def fetch_leetcode(self) -> list[Contest]:
        """Fetch contests from LeetCode (GraphQL API)"""
        return await self._guarded(
            Platform.LEETCODE,
            lambda: self._request_json(
                'POST',
                self.leetcode_url,
                json={'query': LEETCODE_QUERY},
                headers={'Referer': 'https://leetcode.com/contest/'},
            ),
            parse_leetcode,
        )

    async def fetch_codechef(self) -> list[Contest]:
        """Fetch contests from CodeChef"""
        return await self._guarded(
            Platform.CODECHEF,
            lambda: self._request_json('GET', self.codechef_url),
            parse_codechef,
        )

    async def fetch_platform(self, platform: Platform) -> list[Contest]:
        """Fetch contests from a single platform"""
        fetchers = {
            Platform.CODEFORCES: self.fetch_codeforces,
            Platform.LEETCODE: self.fetch_leetcode,
            Platform.CODECHEF: self.fetch_codechef,
        }
        return await fetchers[platform]()

    async def fetch_all(self) -> list[Contest]:
        """Fetch from all platforms, sorted by start time"""
        codeforces, leetcode, codechef = await asyncio.gather(
            self.fetch_codeforces(),
            self.fetch_leetcode(),
            self.fetch_codechef(),
        )

        # sorted() is stable, so equal start times keep platform order
        return sorted(codeforces + leetcode + codechef, key=lambda c: c.start_time_unix)
