from aiohttp import web

from src.config.logger_config import logger
from src.config.settings import CONTENT_DB_PATH, NOT_FOUND_LOG_CAPACITY, WEB_HOST, WEB_PORT
from src.link_audit.application.use_cases.link_health import LinkHealthService
from src.link_audit.audit import build_link_auditor
from src.link_audit.infrastructure.content_sqlite import SQLiteContentRepository
from src.not_found.counter_store import NotFoundCounterStore
from src.redirects.canonical import default_resolver
from src.redirects.domain.resolver import CanonicalResolver
from src.web import routes
from src.web.keys import LINK_HEALTH_KEY, NOT_FOUND_STORE_KEY, RESOLVER_KEY


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception("Unhandled error: method={}, path={}", request.method, request.path)
        return web.json_response({"error": "Failed to process request"}, status=500)


def create_app(
    *,
    link_health: LinkHealthService,
    resolver: CanonicalResolver = default_resolver,
    not_found_store: NotFoundCounterStore | None = None,
) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    app[RESOLVER_KEY] = resolver
    app[LINK_HEALTH_KEY] = link_health
    if not_found_store is None:
        # Counters reset with each application instance.
        not_found_store = NotFoundCounterStore(capacity=NOT_FOUND_LOG_CAPACITY)
    app[NOT_FOUND_STORE_KEY] = not_found_store
    app.add_routes(routes.routes)
    return app


def build_default_app(db_path: str = CONTENT_DB_PATH) -> web.Application:
    repository = SQLiteContentRepository(db_path)
    app = create_app(link_health=LinkHealthService(repository=repository, auditor=build_link_auditor()))

    async def close_repository(_app: web.Application) -> None:
        repository.close()

    app.on_cleanup.append(close_repository)
    return app


def run_web(host: str = WEB_HOST, port: int = WEB_PORT, db_path: str = CONTENT_DB_PATH) -> None:
    logger.info("Starting link health API: host={}, port={}, db_path={}", host, port, db_path)
    web.run_app(build_default_app(db_path), host=host, port=port)
