"""
Route resolution tests (precedence, splitting, suggestions).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from conductor import Controller, Registry
from conductor.routing import (
    IndependentCommand,
    ControllerAction,
    NotFound,
    split_route,
    classify,
    similarity,
    suggest,
)


class HomeController(Controller):
    """Home pages."""


class TestSplitRoute(TestCase):

    def testSplitting(self):
        cases = {
            "home": ("home", ""),
            "home/index": ("home", "index"),
            "home/": ("home", ""),
            "home//index": ("home", "index"),
            "a/b/c": ("b", "c"),
            "a/b/c/d": ("c", "d"),
            "a/b/c/d/e": ("d", "e"),
        }
        for name, expected in cases.items():
            with self.subTest(name=name):
                self.assertEqual(split_route(name), expected)

    def testLeadingDelimiterDisablesSplitting(self):
        self.assertEqual(split_route("/home/index"), ("/home/index", ""))

    def testCustomDelimiter(self):
        self.assertEqual(split_route("home:index", ":"), ("home", "index"))
        self.assertEqual(split_route("home/index", ":"), ("home/index", ""))


class TestClassify(TestCase):

    def setUp(self):
        self.registry = Registry()
        self.registry.register_controller("home", HomeController)
        self.registry.register_controller("deploy", HomeController)
        self.registry.register_command("deploy", lambda: 0)

    def testCommandWinsOverController(self):
        self.assertEqual(classify(self.registry, "deploy"), IndependentCommand("deploy"))

    def testControllerAction(self):
        self.assertEqual(classify(self.registry, "home/index"), ControllerAction("home", "index"))

    def testControllerDefaultAction(self):
        self.assertEqual(classify(self.registry, "home"), ControllerAction("home", ""))

    def testDeepRouteUsesTrailingPair(self):
        self.registry.register_controller("b", HomeController)
        self.registry.register_controller("c", HomeController)
        self.assertEqual(classify(self.registry, "a/b/c"), ControllerAction("b", "c"))
        self.assertEqual(classify(self.registry, "a/b/c/d"), ControllerAction("c", "d"))

    def testUnknownNames(self):
        self.assertEqual(classify(self.registry, "unknown"), NotFound("unknown"))
        self.assertEqual(classify(self.registry, "missing/index"), NotFound("missing/index"))
        self.assertEqual(classify(self.registry, "/home"), NotFound("/home"))

    def testCustomDelimiter(self):
        self.assertEqual(classify(self.registry, "home:index", ":"), ControllerAction("home", "index"))


class TestSuggestions(TestCase):

    def testSimilarity(self):
        self.assertEqual(similarity("abc", "abc"), 100.0)
        self.assertEqual(similarity("abcd", "abxy"), 50.0)
        self.assertEqual(similarity("abcd", "wxyz"), 0.0)
        self.assertEqual(similarity("", "abc"), 0.0)
        self.assertEqual(similarity("", ""), 0.0)

    def testThresholdIsInclusive(self):
        name = "abcdefghi" + "jklmnopqrst"
        exact = "abcdefghi" + "z" * 11  # 9 common of 40 characters: 45%
        below = "abcdefghi" + "z" * 12  # 9 common of 41 characters: 43.9%
        self.assertEqual(similarity(name, exact), 45.0)
        self.assertEqual(suggest(name, [below, exact]), [exact])

    def testSuggestionsKeepCandidateOrder(self):
        self.assertEqual(suggest("site", ["deploy", "sites", "sit"]), ["sites", "sit"])
        self.assertEqual(suggest("site", ["deploy"]), [])


if __name__ == "__main__":
    unittest.main()
