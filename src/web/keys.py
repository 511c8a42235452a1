from aiohttp import web

from src.link_audit.application.use_cases.link_health import LinkHealthService
from src.not_found.counter_store import NotFoundCounterStore
from src.redirects.domain.resolver import CanonicalResolver

RESOLVER_KEY = web.AppKey("resolver", CanonicalResolver)
LINK_HEALTH_KEY = web.AppKey("link_health", LinkHealthService)
NOT_FOUND_STORE_KEY = web.AppKey("not_found_store", NotFoundCounterStore)
