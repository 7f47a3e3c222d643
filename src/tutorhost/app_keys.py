"""Application keys for type-safe app configuration access."""

from aiohttp import web

from tutorhost.core.content import FileContentStore
from tutorhost.core.handler import TutorialPageHandler

handler_key = web.AppKey("handler", TutorialPageHandler)
store_key = web.AppKey("store", FileContentStore)
