import unittest

from src.link_audit.domain.extraction import extract_links, rewrite_links, site_hosts, to_internal_path

ORIGINS = ("https://www.pkminfotech.com", "https://pkminfotech.com")


class ExtractLinksTests(unittest.TestCase):
    def test_double_and_single_quoted_hrefs(self):
        body = '<p><a href="/webseries">x</a> and <a href=\'/temple-guide\'>t</a></p>'
        links = extract_links(body, ORIGINS)
        self.assertEqual([link.path for link in links], ["/webseries", "/temple-guide"])
        self.assertEqual([link.link_text for link in links], ["x", "t"])

    def test_external_links_are_ignored(self):
        body = '<a href="https://example.com/x">ext</a><a href="http://other.org/webseries">o</a>'
        self.assertEqual(extract_links(body, ORIGINS), [])

    def test_site_origin_is_stripped_and_query_fragment_removed(self):
        body = '<a class="btn" href="https://www.pkminfotech.com/mi-cloud?ref=home#top" rel="x">Mi</a>'
        (link,) = extract_links(body, ORIGINS)
        self.assertEqual(link.path, "/mi-cloud")
        self.assertEqual(link.url, "https://www.pkminfotech.com/mi-cloud?ref=home#top")

    def test_protocol_relative_site_link(self):
        (link,) = extract_links('<a href="//pkminfotech.com/webseries">w</a>', ORIGINS)
        self.assertEqual(link.path, "/webseries")

    def test_non_navigational_hrefs_are_ignored(self):
        body = (
            '<a href="mailto:me@pkminfotech.com">mail</a>'
            '<a href="tel:+911234">call</a>'
            '<a href="#section">jump</a>'
            '<a href="javascript:void(0)">js</a>'
            '<a href="relative/page.html">rel</a>'
        )
        self.assertEqual(extract_links(body, ORIGINS), [])

    def test_inner_markup_is_flattened(self):
        (link,) = extract_links('<a href="/x"><strong>Bold</strong>\n  text &amp; more</a>', ORIGINS)
        self.assertEqual(link.link_text, "Bold text & more")

    def test_uppercase_markup(self):
        (link,) = extract_links('<A HREF="/Laptop-Review">L</A>', ORIGINS)
        self.assertEqual(link.path, "/Laptop-Review")

    def test_malformed_fragments_are_skipped(self):
        body = '<a href="/ok">fine</a><a href="/broken>never closed <a href=>empty</a><a href="/dangling">'
        links = extract_links(body, ORIGINS)
        self.assertEqual([link.path for link in links], ["/ok"])

    def test_empty_body(self):
        self.assertEqual(extract_links("", ORIGINS), [])
        self.assertEqual(extract_links(None, ORIGINS), [])


class InternalPathTests(unittest.TestCase):
    def test_hosts_from_origins(self):
        self.assertEqual(site_hosts(ORIGINS + ("www.example.com",)), frozenset({"www.pkminfotech.com", "pkminfotech.com", "www.example.com"}))

    def test_bad_url_does_not_raise(self):
        self.assertIsNone(to_internal_path("http://[::1", site_hosts(ORIGINS)))

    def test_site_root(self):
        self.assertEqual(to_internal_path("https://pkminfotech.com", site_hosts(ORIGINS)), "/")


class RewriteLinksTests(unittest.TestCase):
    def test_rewrites_only_anchors_whose_path_is_mapped(self):
        body = (
            '<link href="/webseries" rel="x">'
            '<a HREF = "https://pkminfotech.com/webseries?x=1">w</a>'
            '<a href="/about-us">a</a>'
            '<a href="mailto:me@example.com">m</a>'
        )
        new_body, replaced = rewrite_links(body, ORIGINS, {"/webseries": "/latest"}.get)
        self.assertEqual(replaced, 1)
        self.assertEqual(
            new_body,
            '<link href="/webseries" rel="x">'
            '<a href="/latest">w</a>'
            '<a href="/about-us">a</a>'
            '<a href="mailto:me@example.com">m</a>',
        )

    def test_empty_body(self):
        self.assertEqual(rewrite_links(None, ORIGINS, lambda path: "/x"), ("", 0))
