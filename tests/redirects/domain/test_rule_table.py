import unittest

from src.redirects.domain.errors import InvalidPatternError
from src.redirects.domain.models import RedirectRule
from src.redirects.domain.rule_table import RedirectRuleTable


class RedirectRuleTableTests(unittest.TestCase):
    def test_first_declared_match_wins(self):
        table = RedirectRuleTable(
            [
                RedirectRule("/x*", "/first"),
                RedirectRule("/xyz", "/second"),
            ]
        )
        rule, destination = table.first_match("/xyz")
        self.assertEqual(rule.source_pattern, "/x*")
        self.assertEqual(destination, "/first")

    def test_exact_rule_declared_first_beats_later_wildcard(self):
        table = RedirectRuleTable(
            [
                RedirectRule("/abc", "/exact"),
                RedirectRule("/a*", "/wild"),
            ]
        )
        self.assertEqual(table.first_match("/abc")[1], "/exact")
        self.assertEqual(table.first_match("/abd")[1], "/wild")

    def test_no_match_returns_none(self):
        table = RedirectRuleTable([RedirectRule("/old", "/new")])
        self.assertIsNone(table.first_match("/new"))

    def test_parameter_destination_is_expanded(self):
        table = RedirectRuleTable([RedirectRule("/pages/:path*", "/:path*")])
        self.assertEqual(table.first_match("/pages/about-us")[1], "/about-us")

    def test_from_mapping_builds_exact_table(self):
        table = RedirectRuleTable.from_mapping({"/a": "/b", "/c": "/d"})
        self.assertEqual(len(table), 2)
        self.assertTrue(table.is_exact)
        self.assertEqual(table.sources(), ("/a", "/c"))
        self.assertEqual(table.to_dict(), {"/a": "/b", "/c": "/d"})
        self.assertTrue(all(rule.permanent for rule in table))

    def test_non_exact_sources_are_listed(self):
        table = RedirectRuleTable([RedirectRule("/a", "/b"), RedirectRule("/c*", "/d")])
        self.assertFalse(table.is_exact)
        self.assertEqual(table.non_exact_sources(), ["/c*"])

    def test_malformed_pattern_fails_at_construction(self):
        with self.assertRaises(InvalidPatternError):
            RedirectRuleTable([RedirectRule("/:a/:b", "/x")])
