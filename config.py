"""
Configuration settings for the Coding Contests API
"""

import os
from zoneinfo import ZoneInfo

# IST timezone (CodeChef publishes local dates in IST)
IST = ZoneInfo('Asia/Kolkata')

# Server
HOST = os.environ.get('HOST', '0.0.0.0')
PORT = int(os.environ.get('PORT') or 4000)

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# API URLs
CODEFORCES_API_URL = os.environ.get(
    'CODEFORCES_API_URL', "https://codeforces.com/api/contest.list"
)
LEETCODE_API_URL = os.environ.get(
    'LEETCODE_API_URL', "https://leetcode.com/graphql"
)
CODECHEF_API_URL = os.environ.get(
    'CODECHEF_API_URL', "https://www.codechef.com/api/list/contests/all"
)

# Time window: "upcoming" or "past"
CONTEST_WINDOW = os.environ.get('CONTEST_WINDOW', 'upcoming').strip().lower()

# Length of the "past" trailing window (two years)
PAST_WINDOW_DAYS = int(os.environ.get('PAST_WINDOW_DAYS') or 730)
