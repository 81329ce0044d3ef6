"""
Input tokenizing tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from conductor import Input


class TestInput(TestCase):

    def testCommandArgumentsAndOptions(self):
        input = Input("site/about one two --name=eiko --force -vq", script="demo")
        self.assertEqual(input.script, "demo")
        self.assertEqual(input.command, "site/about")
        self.assertEqual(input.get_command(), "site/about")
        self.assertEqual(input.get_args(), ["one", "two"])
        self.assertEqual(input.get_arg(1), "two")
        self.assertIsNone(input.get_arg(5))
        self.assertEqual(input.get_opt("name"), "eiko")
        self.assertIs(input.get_opt("force"), True)
        self.assertTrue(input.has_opt("v"))
        self.assertTrue(input.has_opt("x", "q"))
        self.assertFalse(input.has_opt("name2"))
        self.assertEqual(input.get_opt("missing", "fallback"), "fallback")

    def testShellQuoting(self):
        input = Input("hello 'big world' --title=\"a b\"")
        self.assertEqual(input.get_args(), ["big world"])
        self.assertEqual(input.get_opt("title"), "a b")

    def testDoubleDashEndsOptions(self):
        input = Input(["run", "--", "--not-an-option", "-x"])
        self.assertEqual(input.command, "run")
        self.assertEqual(input.get_args(), ["--not-an-option", "-x"])
        self.assertEqual(input.options, {})

    def testOptionsBeforeCommand(self):
        input = Input(["-V"])
        self.assertEqual(input.command, "")
        self.assertTrue(input.has_opt("V"))

    def testSequenceItemsAreTrimmed(self):
        input = Input(["  deploy ", "", "  "])
        self.assertEqual(input.tokens, ("deploy",))

    def testDefaultsToProcessArguments(self):
        with mock.patch.object(sys, "argv", ["/usr/bin/demo", "hello", "--loud"]):
            input = Input()
        self.assertEqual(input.script, "demo")
        self.assertEqual(input.command, "hello")
        self.assertTrue(input.has_opt("loud"))

    def testInvalidArgumentRaises(self):
        with self.assertRaises(TypeError):
            Input(42)
        with self.assertRaises(TypeError):
            Input(["ok", 1])

    def testSetCommand(self):
        input = Input("a")
        input.set_command("b")
        self.assertEqual(input.command, "b")


if __name__ == "__main__":
    unittest.main()
