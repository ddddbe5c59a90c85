"""
HTTP API for the coding contest aggregator
"""

import logging

from aiohttp import web

from fetchers import ContestFetcher
from models import Platform
from tools import error_envelope, index_payload, load_contests
from utils import TimeWindow

logger = logging.getLogger(__name__)

FETCHER_KEY = web.AppKey('fetcher', ContestFetcher)

routes = web.RouteTableDef()


CORS_METHODS = 'GET,HEAD,PUT,PATCH,POST,DELETE'


@web.middleware
async def cors_middleware(request: web.Request, handler):
    """Allow any origin to read the API, answering preflight requests directly"""
    if request.method == 'OPTIONS' and 'Access-Control-Request-Method' in request.headers:
        headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': CORS_METHODS,
        }
        requested = request.headers.get('Access-Control-Request-Headers')
        if requested:
            headers['Access-Control-Allow-Headers'] = requested
        return web.Response(status=204, headers=headers)

    response = await handler(request)
    response.headers['Access-Control-Allow-Origin'] = '*'
    return response


async def _contests_response(request: web.Request, platform: Platform = None) -> web.Response:
    fetcher = request.app[FETCHER_KEY]
    window = TimeWindow.parse(request.query.get('window'), fetcher.window)

    try:
        envelope = await load_contests(fetcher.with_window(window), platform)
    except Exception as e:
        logger.exception(f"Error serving {request.path}")
        return web.json_response(error_envelope(e), status=500)

    return web.json_response(envelope)


@routes.get('/')
async def index(request: web.Request) -> web.Response:
    return web.json_response(index_payload())


@routes.get('/contests')
async def all_contests(request: web.Request) -> web.Response:
    return await _contests_response(request)


@routes.get('/contests/codeforces')
async def codeforces_contests(request: web.Request) -> web.Response:
    return await _contests_response(request, Platform.CODEFORCES)


@routes.get('/contests/leetcode')
async def leetcode_contests(request: web.Request) -> web.Response:
    return await _contests_response(request, Platform.LEETCODE)


@routes.get('/contests/codechef')
async def codechef_contests(request: web.Request) -> web.Response:
    return await _contests_response(request, Platform.CODECHEF)


def create_app(fetcher: ContestFetcher = None) -> web.Application:
    """Build the aiohttp application; ``fetcher`` defaults to the configured one"""
    app = web.Application(middlewares=[cors_middleware])
    app[FETCHER_KEY] = fetcher or ContestFetcher()
    app.add_routes(routes)
    return app
