"""
Argument extractor tests.

Scope
- Keyword spans, value case preservation and declaration-order scanning.
- Positional fallback (single required slot first, then a single optional slot).
- Leftover and missing reporting, primary parameter selection.
"""
import unittest
from unittest import TestCase

from luna import Descriptor
from luna.extraction import Extraction, extract, primary


def handler(context):
    pass


class TestExtract(TestCase):

    def testKeywordSpans(self):
        self.assertEqual(extract("a: foo b: bar", ["a", "b"], []), Extraction({"a": "foo", "b": "bar"}, (), ()))

    def testMultiWordValuesKeepCase(self):
        extraction = extract("user: Alice reason: Being Very Rude", ["user"], ["reason"])
        self.assertEqual(extraction.arguments, {"user": "Alice", "reason": "Being Very Rude"})

    def testKeywordIgnoresCase(self):
        self.assertEqual(extract("USER: Alice", ["user"], []).arguments, {"user": "Alice"})

    def testSingleRequiredFallback(self):
        extraction = extract("alice", ["user"], [])
        self.assertEqual(extraction.arguments, {"user": "alice"})
        self.assertEqual(extraction.leftover, ())
        self.assertEqual(extraction.missing, ())

    def testSingleRequiredFallbackNextToKeywords(self):
        extraction = extract("alice days: 3", ["user"], ["days"])
        self.assertEqual(extraction.arguments, {"user": "alice", "days": "3"})

    def testRequiredSlotWinsOverOptional(self):
        self.assertEqual(extract("alice", ["user"], ["reason"]).arguments, {"user": "alice"})

    def testSingleOptionalFallback(self):
        self.assertEqual(extract("loud", [], ["level"]).arguments, {"level": "loud"})

    def testOptionalFallbackOverwritesKeyword(self):
        self.assertEqual(extract("extra level: 3", [], ["level"]).arguments, {"level": "extra"})

    def testMissingRequired(self):
        extraction = extract("a: x", ["a", "b"], [])
        self.assertEqual(extraction.arguments, {"a": "x"})
        self.assertEqual(extraction.missing, ("b",))

    def testNoFallbackWithTwoMissing(self):
        extraction = extract("foo", ["a", "b"], [])
        self.assertEqual(extraction.missing, ("a", "b"))
        self.assertEqual(extraction.leftover, ("foo",))

    def testValueRunsToEndOfInput(self):
        self.assertEqual(
            extract("target: foo extra words", ["target"], []),
            Extraction({"target": "foo extra words"}, (), ()),
        )

    def testUntaggedTextBeforeFirstKeywordIsLeftover(self):
        extraction = extract("stray a: x b: y", ["a", "b"], [])
        self.assertEqual(extraction.arguments, {"a": "x", "b": "y"})
        self.assertEqual(extraction.leftover, ("stray",))
        self.assertEqual(extraction.missing, ())

    def testExcessWithoutParameters(self):
        self.assertEqual(extract("foo bar", [], []).leftover, ("foo", "bar"))

    def testNoFallbackWithTwoOptionals(self):
        extraction = extract("foo", [], ["a", "b"])
        self.assertEqual(extraction.arguments, {})
        self.assertEqual(extraction.leftover, ("foo",))

    def testEmptyValues(self):
        self.assertEqual(extract("a: b: x", ["a", "b"], []).arguments, {"a": "", "b": "x"})
        self.assertEqual(extract("a:", ["a"], []).arguments, {"a": ""})

    def testEmptyText(self):
        self.assertEqual(extract("", ["a"], ["b"]), Extraction({}, (), ("a",)))


class TestPrimary(TestCase):

    def testWholeTextWithoutParameters(self):
        descriptor = Descriptor("say", handler)
        self.assertEqual(primary(descriptor, extract("hi there", [], []), "hi there"), "hi there")

    def testFirstDeclaredValue(self):
        descriptor = Descriptor("ban", handler, parameters=["user", "optional: days"])
        extraction = extract("days: 3 user: alice", descriptor.required, descriptor.optional, descriptor.names)
        self.assertEqual(primary(descriptor, extraction, "days: 3 user: alice"), "alice")

    def testFirstPresentValue(self):
        descriptor = Descriptor("volume", handler, parameters=["optional: level", "optional: channel"])
        extraction = extract("channel: music", descriptor.required, descriptor.optional, descriptor.names)
        self.assertEqual(primary(descriptor, extraction, "channel: music"), "music")

    def testNone(self):
        descriptor = Descriptor("volume", handler, parameters=["optional: level"])
        self.assertIsNone(primary(descriptor, extract("", [], ["level"]), ""))


if __name__ == "__main__":
    unittest.main()
