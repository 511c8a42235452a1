import asyncio
import json
from typing import Any

from aiohttp import web

from src.config.logger_config import logger
from src.link_audit.domain.rules import RECOMMENDATIONS
from src.not_found.suggestions import common_patterns, suggest_redirect
from src.web.keys import LINK_HEALTH_KEY, NOT_FOUND_STORE_KEY, RESOLVER_KEY

routes = web.RouteTableDef()

LINK_HEALTH_PREVIEW_LIMIT = 20
FIX_OVERVIEW_LIMIT = 10
FIX_SCAN_LIMIT = 50
TOP_NOT_FOUND_LIMIT = 50

SAMPLE_CANONICAL_PATHS = (
    "/",
    "/latest",
    "/english",
    "/hindi",
    "/about-us",
    "/contact-us",
    "/privacy-policy",
    "/disclaimers",
    "/blog/test-post",
    "/pages/test-page",
)
PATTERN_TEST_PATHS = (
    "/blog/some-post",
    "/diwali2020",
    "/microsoft-office-guide",
    "/p/old-post",
    "/2023/old-article",
)


class BadRequest(web.HTTPBadRequest):
    def __init__(self, message: str) -> None:
        super().__init__(text=json.dumps({"error": message}), content_type="application/json")


async def _read_json_object(request: web.Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequest("Invalid JSON body")
    if not isinstance(payload, dict):
        raise BadRequest("JSON object expected")
    return payload


# ---------------------------------------------------------------- canonical


@routes.get("/api/validate-canonical")
async def validate_canonical_samples(request: web.Request) -> web.Response:
    resolver = request.app[RESOLVER_KEY]
    urls = [f"{resolver.base_url}{path}" for path in SAMPLE_CANONICAL_PATHS]
    results = resolver.validate_canonical_urls(urls)
    issues = [result for result in results if not result.is_valid]

    pattern_tests = []
    for path in PATTERN_TEST_PATHS:
        canonical = resolver.generate_canonical_url(path)
        pattern_tests.append(
            {
                "pattern": path,
                "correct_canonical": canonical,
                "would_redirect": resolver.would_redirect(path),
            }
        )

    if issues:
        status = f"{len(issues)} canonical URL issues found"
        recommendations = [
            "Update canonical URLs to point to final destinations",
            "Use generate_canonical_url() in all page metadata",
            "Check for redirect chains in canonical tags",
            "Ensure no hardcoded URLs that redirect",
        ]
    else:
        status = "All canonical URLs are valid"
        recommendations = ["All canonical URLs are properly configured"]

    return web.json_response(
        {
            "status": status,
            "total": len(results),
            "issues": len(issues),
            "valid": len(results) - len(issues),
            "results": [result.to_dict() for result in results],
            "pattern_tests": pattern_tests,
            "recommendations": recommendations,
        }
    )


@routes.post("/api/validate-canonical")
async def validate_canonical_urls(request: web.Request) -> web.Response:
    payload = await _read_json_object(request)
    urls = payload.get("urls")
    if not isinstance(urls, list) or not all(isinstance(url, str) for url in urls):
        raise BadRequest("URLs array required")

    results = request.app[RESOLVER_KEY].validate_canonical_urls(urls)
    issues = sum(1 for result in results if not result.is_valid)
    logger.info("Canonical validation: total={}, issues={}", len(results), issues)
    return web.json_response(
        {
            "total": len(results),
            "issues": issues,
            "valid": len(results) - issues,
            "results": [result.to_dict() for result in results],
        }
    )


# -------------------------------------------------------------- link health


@routes.get("/api/link-health")
async def link_health_overview(request: web.Request) -> web.Response:
    scan = await asyncio.to_thread(request.app[LINK_HEALTH_KEY].scan_for_broken_links)
    body = scan.to_dict(limit=LINK_HEALTH_PREVIEW_LIMIT)
    body["status"] = "success"
    body["recommendations"] = list(RECOMMENDATIONS)
    return web.json_response(body)


@routes.post("/api/link-health")
async def link_health_action(request: web.Request) -> web.Response:
    payload = await _read_json_object(request)
    action = payload.get("action")
    service = request.app[LINK_HEALTH_KEY]
    if action == "fix":
        report = await asyncio.to_thread(service.fix_broken_links)
        return web.json_response(report.to_dict())
    if action == "scan":
        scan = await asyncio.to_thread(service.scan_for_broken_links)
        return web.json_response({"broken_links": [finding.to_dict() for finding in scan.findings]})
    raise BadRequest("Invalid action")


@routes.get("/api/fix-broken-links")
async def fix_broken_links_overview(request: web.Request) -> web.Response:
    scan = await asyncio.to_thread(request.app[LINK_HEALTH_KEY].scan_for_broken_links)
    return web.json_response(
        {
            "total": scan.summary.total_broken_links,
            "fixable": scan.summary.fixable_links,
            "by_classification": scan.summary.by_classification,
            "top_issues": [finding.to_dict() for finding in scan.findings[:FIX_OVERVIEW_LIMIT]],
        }
    )


@routes.post("/api/fix-broken-links")
async def fix_broken_links_action(request: web.Request) -> web.Response:
    payload = await _read_json_object(request)
    action = payload.get("action")
    service = request.app[LINK_HEALTH_KEY]
    if action == "scan":
        scan = await asyncio.to_thread(service.scan_for_broken_links)
        body = scan.to_dict(limit=FIX_SCAN_LIMIT)
        body["recommendations"] = list(RECOMMENDATIONS)
        return web.json_response(body)
    if action == "fix":
        urls = payload.get("urls")
        if urls is not None and (not isinstance(urls, list) or not all(isinstance(url, str) for url in urls)):
            raise BadRequest("urls must be an array of paths")
        report = await asyncio.to_thread(service.fix_broken_links, urls)
        return web.json_response(report.to_dict())
    raise BadRequest("Invalid action")


# ------------------------------------------------------------ 404 analytics


@routes.get("/api/404-analytics")
async def not_found_analytics(request: web.Request) -> web.Response:
    store = request.app[NOT_FOUND_STORE_KEY]
    top = store.top(TOP_NOT_FOUND_LIMIT)
    return web.json_response(
        {
            "total_404s": len(store),
            "total_hits": store.total_hits(),
            "top_404s": [entry.to_dict() for entry in top],
            "patterns": common_patterns(top),
        }
    )


@routes.post("/api/404-analytics")
async def record_not_found(request: web.Request) -> web.Response:
    payload = await _read_json_object(request)
    pathname = payload.get("pathname")
    if not isinstance(pathname, str) or not pathname:
        raise BadRequest("pathname required")

    store = request.app[NOT_FOUND_STORE_KEY]
    entry = store.record(pathname, suggest_redirect(pathname))
    logger.info("404 tracked: pathname={}, count={}, suggested={}", pathname, entry.count, entry.suggested)
    return web.json_response({"success": True, "suggested": entry.suggested, "count": entry.count})
