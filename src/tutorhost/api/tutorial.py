"""Tutorial API endpoints.

Serves the tutorial index and per-exercise page data as JSON.
"""

from aiohttp import web

from tutorhost.app_keys import handler_key, store_key
from tutorhost.core.handler import PageError, Redirect
from tutorhost.core.types import TUTORIAL_PREFIX


def create_tutorial_routes() -> list[web.RouteDef]:
    return [
        web.get(TUTORIAL_PREFIX, get_index),
        web.get(f"{TUTORIAL_PREFIX}/{{slug}}", get_exercise_page),
    ]


async def get_index(request: web.Request) -> web.Response:
    store = request.app[store_key]
    parts = await store.load_index()
    return web.json_response({"parts": [part.to_dict() for part in parts]})


async def get_exercise_page(request: web.Request) -> web.Response:
    slug = request.match_info["slug"]
    handler = request.app[handler_key]

    outcome = await handler.handle(slug)

    if isinstance(outcome, Redirect):
        return web.json_response(
            {"location": outcome.location},
            status=outcome.status,
            headers={"Location": outcome.location},
        )

    if isinstance(outcome, PageError):
        return web.json_response(
            {"error": outcome.message, "slug": slug},
            status=outcome.status,
        )

    return web.json_response(outcome.data)
