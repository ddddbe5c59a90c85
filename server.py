"""
Coding Contests MCP Server
Exposes Codeforces, LeetCode, and CodeChef contests as MCP tools
"""

import json

from mcp.server.fastmcp import FastMCP
from tools import fetch_contests_tool, index_payload

# Create FastMCP server
mcp = FastMCP("coding-contests")


@mcp.resource("contests://endpoints")
async def get_endpoints() -> str:
    """List the contest views this service offers"""
    return json.dumps(index_payload(), indent=2)


@mcp.tool()
async def fetch_contests(platform: str = "", window: str = "") -> str:
    """
    Fetch coding contests from LeetCode, CodeChef, and Codeforces, sorted by start time

    Args:
        platform: Filter by platform (codeforces, leetcode, codechef). Leave empty for all.
        window: "upcoming" or "past" (last two years). Leave empty for the server default.
    """
    return await fetch_contests_tool(platform, window)


if __name__ == "__main__":
    mcp.run()
