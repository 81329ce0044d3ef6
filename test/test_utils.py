"""
Helper tests (sentinel, naming, import references, logging, stubs).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import logging
import pathlib
import unittest
from unittest import TestCase

import conductor
from conductor.commands import Command
from conductor.logger import configure, get_logger
from conductor.utils import Unset, UnsetType, coalesce, hyphenate, resolve


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestHyphenate(TestCase):

    def testSuffixesAreDropped(self):
        self.assertEqual(hyphenate("DeployCommand", "Command"), "deploy")
        self.assertEqual(hyphenate("UserProfileController", "Controller", "Group"), "user-profile")
        self.assertEqual(hyphenate("AdminGroup", "Controller", "Group"), "admin")
        self.assertEqual(hyphenate("Command", "Command"), "command")
        self.assertEqual(hyphenate("HomeController"), "home-controller")

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            hyphenate(42)


class TestResolve(TestCase):

    def testResolvesAttributes(self):
        self.assertIs(resolve("conductor.commands:Command"), Command)
        self.assertIs(resolve("conductor.commands:Command.run"), Command.run)

    def testLookupErrors(self):
        for reference in ("conductor.commands", "conductor.nope:Thing", "conductor.commands:Thing", ":Thing"):
            with self.subTest(reference=reference):
                with self.assertRaises(LookupError):
                    resolve(reference)
        with self.assertRaises(TypeError):
            resolve(None)


class TestLogger(TestCase):

    def tearDown(self):
        logging.getLogger("conductor").setLevel(logging.WARNING)

    def testLoggersShareTheConductorRoot(self):
        self.assertEqual(get_logger("conductor.registry").name, "conductor.registry")
        self.assertEqual(get_logger("plugins").name, "conductor.plugins")

    def testConfigureLevels(self):
        self.assertEqual(configure(verbose=True).level, logging.DEBUG)
        self.assertEqual(configure(quiet=True).level, logging.ERROR)
        self.assertEqual(configure().level, logging.INFO)



class TestStubs(TestCase):

    def testPublicModulesShipStubs(self):
        package = pathlib.Path(conductor.__file__).parent
        for module in ("application", "commands", "input", "logger", "names", "output", "registry", "routing"):
            with self.subTest(module=module):
                self.assertTrue((package / f"{module}.pyi").is_file())


if __name__ == "__main__":
    unittest.main()
