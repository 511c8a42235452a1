import threading

from aiohttp.test_utils import AioHTTPTestCase

from src.link_audit.application.use_cases.link_health import LinkHealthService
from src.link_audit.domain.auditor import LinkAuditor
from src.not_found.counter_store import NotFoundCounterStore
from src.redirects.canonical import default_resolver
from src.redirects.domain.rule_table import RedirectRuleTable
from src.web.app import create_app
from tests.utils.fakes import InMemoryContentRepository, doc


class _ThreadRecordingRepository(InMemoryContentRepository):
    def __init__(self, documents=None) -> None:
        super().__init__(documents)
        self.list_threads: list[int] = []

    def list_published_documents(self):
        self.list_threads.append(threading.get_ident())
        return super().list_published_documents()


class _ExplodingRepository(InMemoryContentRepository):
    def list_published_documents(self):
        raise RuntimeError("connection refused")


def _auditor() -> LinkAuditor:
    return LinkAuditor(
        fixes=RedirectRuleTable.from_mapping({"/webseries": "/latest", "/temple-guide": "/hindi"}),
        site_origins=("https://www.pkminfotech.com",),
        fallback_page="/latest",
    )


class RoutesTestBase(AioHTTPTestCase):
    def make_repository(self) -> InMemoryContentRepository:
        return InMemoryContentRepository(
            [
                doc(1, '<a href="/webseries">w</a><a href="/webseries">w</a>'),
                doc(2, '<a href="/temple-guide">t</a><a href="/travel-diary">d</a>'),
                doc(3, '<a href="/about-us">ok</a>'),
            ]
        )

    async def get_application(self):
        self.repository = self.make_repository()
        self.not_found_store = NotFoundCounterStore(capacity=3)
        return create_app(
            link_health=LinkHealthService(repository=self.repository, auditor=_auditor()),
            not_found_store=self.not_found_store,
        )


class ValidateCanonicalRouteTests(RoutesTestBase):
    async def test_get_validates_sample_set(self):
        resp = await self.client.get("/api/validate-canonical")
        self.assertEqual(resp.status, 200)
        body = await resp.json()
        self.assertEqual(body["total"], 10)
        self.assertEqual(body["issues"], 2)
        invalid = {r["url"]: r["should_be"] for r in body["results"] if not r["is_valid"]}
        base = default_resolver.base_url
        self.assertEqual(invalid[f"{base}/blog/test-post"], f"{base}/test-post")
        diwali = next(t for t in body["pattern_tests"] if t["pattern"] == "/diwali2020")
        self.assertEqual(diwali["correct_canonical"], f"{base}/latest")
        self.assertTrue(diwali["would_redirect"])

    async def test_post_validates_supplied_urls(self):
        base = default_resolver.base_url
        resp = await self.client.post(
            "/api/validate-canonical",
            json={"urls": [f"{base}/latest", f"{base}/diwali2020", "nope"]},
        )
        self.assertEqual(resp.status, 200)
        body = await resp.json()
        self.assertEqual((body["total"], body["issues"], body["valid"]), (3, 2, 1))
        self.assertEqual(body["results"][1]["should_be"], f"{base}/latest")

    async def test_post_requires_url_list(self):
        resp = await self.client.post("/api/validate-canonical", json={"urls": "https://x"})
        self.assertEqual(resp.status, 400)
        self.assertEqual((await resp.json())["error"], "URLs array required")

    async def test_post_rejects_invalid_json(self):
        resp = await self.client.post("/api/validate-canonical", data="{not json", headers={"Content-Type": "application/json"})
        self.assertEqual(resp.status, 400)


class LinkHealthRouteTests(RoutesTestBase):
    async def test_get_returns_summary(self):
        resp = await self.client.get("/api/link-health")
        self.assertEqual(resp.status, 200)
        body = await resp.json()
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["summary"]["total_broken_links"], 4)
        self.assertEqual(body["summary"]["fixable_links"], 3)
        self.assertEqual(body["summary"]["by_classification"], {"missing": 1, "redirected": 3})
        self.assertEqual(len(body["broken_links"]), 4)
        self.assertTrue(body["recommendations"])

    async def test_post_scan_returns_all_findings(self):
        resp = await self.client.post("/api/link-health", json={"action": "scan"})
        body = await resp.json()
        self.assertEqual(len(body["broken_links"]), 4)

    async def test_post_fix_rewrites_documents(self):
        resp = await self.client.post("/api/link-health", json={"action": "fix"})
        self.assertEqual(resp.status, 200)
        body = await resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["summary"], {"blogs_updated": 2, "errors": 0, "total_processed": 2})
        self.assertEqual(self.repository.documents[1].body, '<a href="/latest">w</a><a href="/latest">w</a>')

        again = await (await self.client.post("/api/link-health", json={"action": "fix"})).json()
        self.assertEqual(again["summary"]["blogs_updated"], 0)

    async def test_post_unknown_action(self):
        resp = await self.client.post("/api/link-health", json={"action": "delete"})
        self.assertEqual(resp.status, 400)
        self.assertEqual((await resp.json())["error"], "Invalid action")


class FixBrokenLinksRouteTests(RoutesTestBase):
    async def test_get_overview(self):
        body = await (await self.client.get("/api/fix-broken-links")).json()
        self.assertEqual(body["total"], 4)
        self.assertEqual(body["fixable"], 3)
        self.assertEqual(len(body["top_issues"]), 4)

    async def test_post_scan(self):
        body = await (await self.client.post("/api/fix-broken-links", json={"action": "scan"})).json()
        self.assertEqual(body["summary"]["total_broken_links"], 4)
        self.assertIn("recommendations", body)

    async def test_post_fix_with_url_filter(self):
        resp = await self.client.post("/api/fix-broken-links", json={"action": "fix", "urls": ["/temple-guide"]})
        body = await resp.json()
        self.assertEqual(body["summary"]["blogs_updated"], 1)
        self.assertIn('href="/webseries"', self.repository.documents[1].body)
        self.assertIn('href="/hindi"', self.repository.documents[2].body)

    async def test_post_fix_rejects_bad_filter(self):
        resp = await self.client.post("/api/fix-broken-links", json={"action": "fix", "urls": "/webseries"})
        self.assertEqual(resp.status, 400)


class NotFoundAnalyticsRouteTests(RoutesTestBase):
    async def test_record_and_report(self):
        for _ in range(2):
            resp = await self.client.post("/api/404-analytics", json={"pathname": "/microsoft-old"})
        body = await resp.json()
        self.assertEqual(body, {"success": True, "suggested": "/latest", "count": 2})

        report = await (await self.client.get("/api/404-analytics")).json()
        self.assertEqual(report["total_404s"], 1)
        self.assertEqual(report["total_hits"], 2)
        self.assertEqual(report["top_404s"][0]["url"], "/microsoft-old")
        self.assertEqual(report["patterns"], {"microsoft-related": 2})

    async def test_pathname_required(self):
        resp = await self.client.post("/api/404-analytics", json={})
        self.assertEqual(resp.status, 400)

    async def test_store_is_bounded(self):
        for path in ("/a", "/b", "/c", "/d"):
            await self.client.post("/api/404-analytics", json={"pathname": path})
        self.assertEqual(len(self.not_found_store), 3)
        self.assertNotIn("/a", self.not_found_store)


class ErrorHandlingRouteTests(RoutesTestBase):
    def make_repository(self) -> InMemoryContentRepository:
        return _ExplodingRepository()

    async def test_unexpected_error_becomes_generic_500(self):
        resp = await self.client.get("/api/link-health")
        self.assertEqual(resp.status, 500)
        body = await resp.json()
        self.assertEqual(body, {"error": "Failed to process request"})


class BlockingWorkRouteTests(RoutesTestBase):
    def make_repository(self) -> InMemoryContentRepository:
        return _ThreadRecordingRepository([doc(1, '<a href="/webseries">w</a>')])

    async def test_scan_and_fix_run_off_the_event_loop_thread(self):
        loop_thread = threading.get_ident()
        await self.client.get("/api/link-health")
        await self.client.post("/api/fix-broken-links", json={"action": "fix"})
        self.assertEqual(len(self.repository.list_threads), 2)
        self.assertNotIn(loop_thread, self.repository.list_threads)
        self.assertEqual(self.repository.documents[1].body, '<a href="/latest">w</a>')
