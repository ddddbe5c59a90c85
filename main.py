"""
Coding Contests API
Aggregates Codeforces, LeetCode, and CodeChef contests over HTTP
"""

import logging

from aiohttp import web

from api import FETCHER_KEY, create_app
from config import HOST, LOG_LEVEL, PORT

logger = logging.getLogger(__name__)


async def on_startup(app: web.Application):
    window = app[FETCHER_KEY].window.value
    logger.info(f"Server running on port {PORT} (default window: {window})")


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    app = create_app()
    app.on_startup.append(on_startup)
    web.run_app(app, host=HOST, port=PORT, print=None)


if __name__ == "__main__":
    main()
