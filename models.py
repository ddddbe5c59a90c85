"""
Normalized contest record shared by every platform
"""

import enum
from dataclasses import dataclass
from typing import Optional


class Platform(str, enum.Enum):
    CODEFORCES = 'Codeforces'
    LEETCODE = 'LeetCode'
    CODECHEF = 'CodeChef'

    @classmethod
    def from_slug(cls, slug: str) -> 'Platform':
        """Look up a platform by its lowercase URL slug (e.g. ``codechef``)"""
        for platform in cls:
            if platform.slug == slug.strip().lower():
                return platform
        raise ValueError(f"Unknown platform: {slug}")

    @property
    def slug(self) -> str:
        return self.value.lower()


@dataclass(frozen=True)
class Contest:
    """A single contest, normalized across platforms"""

    platform: Platform
    name: str
    start_time_unix: int
    start_time: str
    duration: str
    url: str
    duration_seconds: Optional[int] = None
    code: Optional[str] = None
    end_time: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize with the API's camelCase keys, dropping absent fields"""
        data = {
            'platform': self.platform.value,
            'name': self.name,
            'code': self.code,
            'startTimeUnix': self.start_time_unix,
            'startTime': self.start_time,
            'durationSeconds': self.duration_seconds,
            'endTime': self.end_time,
            'duration': self.duration,
            'url': self.url,
        }
        return {key: value for key, value in data.items() if value is not None}
