"""aiohttp server for Tutorhost.

Application factory and route registration.
"""

import logging

from aiohttp import web

from tutorhost.api.tutorial import create_tutorial_routes
from tutorhost.app_keys import handler_key, store_key
from tutorhost.config import Config
from tutorhost.core.cache import FileCache
from tutorhost.core.content import FileContentStore
from tutorhost.core.handler import TutorialPageHandler
from tutorhost.core.renderer import ExerciseRenderer
from tutorhost.core.router import SlugRouter

logger = logging.getLogger(__name__)


def create_handler(config: Config) -> tuple[FileContentStore, TutorialPageHandler]:
    """Build the content store and page handler described by config.

    Raises:
        ValueError: If the configured redirect table is invalid
    """
    cache = FileCache(config.content.cache_dir) if config.content.cache_enabled else None
    store = FileContentStore(config.content.source_dir, ExerciseRenderer(cache))
    handler = TutorialPageHandler(store, SlugRouter(config.redirects))
    return store, handler


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    store, handler = create_handler(config)
    app[store_key] = store
    app[handler_key] = handler

    app.router.add_routes(create_tutorial_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server."""
    app = create_app(config)
    logger.info(f"Serving tutorial from {config.content.source_dir}")
    web.run_app(app, host=config.server.host, port=config.server.port)
