"""
Help command tests, run through the engine with a recording reporter.
"""
import unittest
from unittest import TestCase

from luna import *


class Recorder:
    """Reporter double keeping every call."""

    def __init__(self):
        self.sent = []
        self.warnings = []

    def send(self, message, /, *, title=None, fields=()):
        self.sent.append((message, title, tuple(fields)))

    def warn(self, message, /):
        self.warnings.append(message)


def handler(context):
    pass


class TestHelp(TestCase):

    def setUp(self):
        self.reporter = Recorder()
        self.help = help_command(self.reporter, alias="luna")
        self.moderation = Module("Moderation", [
            Descriptor("ban", handler, parameters=["user"], description="Bans a user"),
            Descriptor("kick", handler, parameters=["user"]),
            Descriptor("mute", handler, parameters=["user"]),
            Descriptor("warn", handler, parameters=["user"]),
        ])
        catalog = Catalog.from_modules([Module("Information", [self.help]), self.moderation])
        self.engine = Engine(catalog)

    def process(self, content):
        return self.engine.process(Message(content, "general", "alice"))

    def testDescriptor(self):
        self.assertEqual(self.help.identifier, "help")
        self.assertEqual(self.help.aliases, ("commands",))
        self.assertEqual(self.help.optional, ("module",))

    def testMenu(self):
        self.assertIsInstance(self.process("luna help"), Dispatched)
        (message, title, fields), = self.reporter.sent
        self.assertEqual(title, "help menu")
        listing = dict(fields)["available modules"]
        self.assertIn("Information ~ [luna help]", listing)
        self.assertIn("Moderation ~ [luna ban, luna kick, luna mute, ...]", listing)

    def testModule(self):
        outcome = self.process("luna commands MODERATION")
        self.assertIs(outcome.result, self.moderation)
        (message, title, fields), = self.reporter.sent
        self.assertEqual(title, "list of commands of the moderation module")
        self.assertIn("luna ban\nBans a user\nusage: luna ban <user>", message)

    def testUnknownModule(self):
        self.assertIsNone(self.process("luna help music").result)
        self.assertEqual(self.reporter.sent, [])
        self.assertEqual(len(self.reporter.warnings), 1)
        self.assertIn("luna help", self.reporter.warnings[0])


if __name__ == "__main__":
    unittest.main()
