"""
Command matcher tests (keyword lookup, singleton fallback, unknown commands).
"""
import unittest
from unittest import TestCase

from luna import Catalog, Descriptor, UnknownCommandError, FaultCode
from luna.matcher import keyword, matches, match


def handler(context):
    pass


class TestMatch(TestCase):

    def setUp(self):
        self.ban = Descriptor("ban", handler, aliases=["suspend"], parameters=["user"])
        self.echo = Descriptor("$echo", handler)
        self.catalog = Catalog([self.ban])

    def testKeyword(self):
        self.assertEqual(keyword("Ban alice"), "ban")
        self.assertEqual(keyword(""), "")

    def testMatchesPredicate(self):
        self.assertTrue(matches(self.ban, "ban"))
        self.assertTrue(matches(self.ban, "suspend"))
        self.assertFalse(matches(self.ban, "kick"))
        self.assertTrue(matches(self.echo, "anything"))

    def testIdentifier(self):
        self.assertEqual(match("ban alice", self.catalog), (self.ban, "alice"))

    def testAlias(self):
        self.assertEqual(match("suspend alice", self.catalog), (self.ban, "alice"))

    def testKeywordIgnoresCase(self):
        self.assertEqual(match("BAN Alice", self.catalog), (self.ban, "Alice"))

    def testKeywordOnly(self):
        self.assertEqual(match("ban", self.catalog), (self.ban, ""))

    def testUnknownRaises(self):
        with self.assertRaises(UnknownCommandError) as context:
            match("kick alice", self.catalog, "luna")
        fault = context.exception
        self.assertEqual(fault.options["keyword"], "kick")
        self.assertEqual(fault.code, FaultCode.UNKNOWN_COMMAND)
        self.assertIn("luna help", fault.options["hint"])

    def testSingletonFallback(self):
        catalog = Catalog([self.ban, self.echo])
        self.assertEqual(match("hello there", catalog), (self.echo, "hello there"))

    def testKeywordWinsOverSingleton(self):
        catalog = Catalog([self.echo, self.ban])
        self.assertEqual(match("ban alice", catalog), (self.ban, "alice"))

    def testSingletonsInCatalogOrder(self):
        other = Descriptor("$other", handler)
        catalog = Catalog([other, self.echo])
        self.assertIs(match("hello", catalog)[0], other)


if __name__ == "__main__":
    unittest.main()
