"""
Descriptor layer tests (classification, normalization, validation, help text).

Scope
- Validate the parameter classifier partition.
- Validate metadata normalization and construction-time faults.
- Validate the decorator/direct forms of command() and the sealed descriptor type.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Descriptor, classify, command).
"""
import unittest
from unittest import TestCase

from luna import Descriptor, classify, command


def handler(context):
    """Does nothing at all"""


class TestClassify(TestCase):
    """Behavioral tests for the parameter classifier."""

    def testPartitionKeepsOrder(self):
        required, optional = classify(["a", "optional: b", "c", "optional:d"])
        self.assertEqual(required, ("a", "c"))
        self.assertEqual(optional, ("b", "d"))

    def testPartitionIsDisjointAndComplete(self):
        parameters = ["user", "optional: days", "optional: reason", "channel"]
        required, optional = classify(parameters)
        self.assertFalse(set(required) & set(optional))
        self.assertEqual(len(required) + len(optional), len(parameters))

    def testEmpty(self):
        self.assertEqual(classify([]), ((), ()))

    def testRejectsPlainString(self):
        with self.assertRaises(TypeError):
            classify("user")

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            classify(["user", 3])


class TestDescriptor(TestCase):
    """Construction and normalization of descriptors."""

    def testKeywordsAreLowerCased(self):
        descriptor = Descriptor("Ban", handler, aliases=["Suspend"])
        self.assertEqual(descriptor.identifier, "ban")
        self.assertEqual(descriptor.aliases, ("suspend",))

    def testParametersAreClassified(self):
        descriptor = Descriptor("ban", handler, parameters=["user", "optional:days", "optional: reason"])
        self.assertEqual(descriptor.parameters, ("user", "optional: days", "optional: reason"))
        self.assertEqual(descriptor.required, ("user",))
        self.assertEqual(descriptor.optional, ("days", "reason"))
        self.assertEqual(descriptor.names, ("user", "days", "reason"))

    def testDuplicateAliasRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban", handler, aliases=["suspend", "SUSPEND"])

    def testAliasEqualToIdentifierRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban", handler, aliases=["ban"])

    def testMultiWordKeywordRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban user", handler)

    def testEmptyIdentifierRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("   ", handler)

    def testAliasesMustNotBeAString(self):
        with self.assertRaises(TypeError):
            Descriptor("ban", handler, aliases="suspend")

    def testParameterWithSeparatorRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban", handler, parameters=["user:name"])

    def testMultiWordParameterRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("tag", handler, parameters=["tag name"])
        with self.assertRaises(ValueError):
            Descriptor("tag", handler, parameters=["optional: tag name"])

    def testRepeatedParameterRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban", handler, parameters=["user", "optional: User"])

    def testNamelessOptionalRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban", handler, parameters=["optional:"])

    def testSelfDependencyRaises(self):
        with self.assertRaises(ValueError):
            Descriptor("ban", handler, dependencies=["ban"])

    def testHandlerMustBeCallable(self):
        with self.assertRaises(TypeError):
            Descriptor("ban", "handler")

    def testRestrictedMustBeBoolean(self):
        with self.assertRaises(TypeError):
            Descriptor("ban", handler, restricted="yes")

    def testSingleton(self):
        descriptor = Descriptor("$echo", handler)
        self.assertTrue(descriptor.singleton)
        self.assertFalse(Descriptor("echo", handler).singleton)

    def testSingletonCannotHaveAliases(self):
        with self.assertRaises(ValueError):
            Descriptor("$echo", handler, aliases=["repeat"])

    def testSingletonCannotHaveParameters(self):
        with self.assertRaises(ValueError):
            Descriptor("$echo", handler, parameters=["text"])

    def testDescriptionDefaultsToDocstring(self):
        self.assertEqual(Descriptor("noop", handler).description, "Does nothing at all")
        self.assertEqual(Descriptor("noop", handler, description="Explicit").description, "Explicit")
        self.assertIsNone(Descriptor("noop", lambda context: None).description)

    def testFieldsAreReadOnly(self):
        descriptor = Descriptor("ban", handler)
        with self.assertRaises(AttributeError):
            descriptor.identifier = "kick"

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Custom(Descriptor):
                pass

    def testCallInvokesHandler(self):
        descriptor = Descriptor("ping", lambda context: ("pong", context))
        self.assertEqual(descriptor("ctx"), ("pong", "ctx"))

    def testRepr(self):
        self.assertTrue(repr(Descriptor("ban", handler)).startswith("descriptor(identifier='ban'"))


class TestHelpText(TestCase):
    """Caller, usage and information strings."""

    def setUp(self):
        self.descriptor = Descriptor(
            "ban",
            handler,
            aliases=["suspend"],
            parameters=["user", "optional: days", "optional: reason"],
            description="Bans a user",
        )

    def testCaller(self):
        self.assertEqual(self.descriptor.caller(), "ban")
        self.assertEqual(self.descriptor.caller("luna"), "luna ban")

    def testUsage(self):
        self.assertEqual(self.descriptor.usage("luna"), "luna ban <user> [days] [reason]")

    def testInformation(self):
        self.assertEqual(
            self.descriptor.information("luna"),
            "luna ban (suspend)\nBans a user\nusage: luna ban <user> [days] [reason]",
        )


class TestCommandFactory(TestCase):
    """Direct and decorator forms of command()."""

    def testDecorator(self):
        @command("ban", parameters=["user"])
        def ban(context):
            pass

        self.assertIsInstance(ban, Descriptor)
        self.assertEqual(ban.required, ("user",))

    def testDirect(self):
        descriptor = command("ban", handler, ["suspend"])
        self.assertIsInstance(descriptor, Descriptor)
        self.assertEqual(descriptor.aliases, ("suspend",))

    def testDecoratorRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            command("ban")("not callable")


if __name__ == "__main__":
    unittest.main()
