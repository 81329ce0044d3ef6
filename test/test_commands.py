"""
Capability tests (Command and Controller base classes).

Scope
- Class-derived names and descriptions.
- Instance-level renaming never touches the class.
- Controller action lookup, default action, unknown actions and help.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from conductor import Command, Controller, Input, Output


def captured():
    console = Console(file=io.StringIO(), color_system=None, width=100)
    return Output(console, colorful=False), console.file.getvalue


class DeployCommand(Command):
    """Deploy the application.

    Longer text.
    """

    def execute(self, input, output):
        output.write("deploying %s" % input.get_arg(0, "all"))


class NamedCommand(Command):
    name = "custom"
    description = "Declared description"


class FailingCommand(Command):

    def execute(self, input, output):
        return 3


class UserProfileController(Controller):
    """User profile actions."""

    def show_command(self, input, output):
        """Show a profile."""
        output.write("profile of %s" % input.get_arg(0))

    def clear_cache_command(self, input, output):
        """Clear the profile cache."""
        return 7

    def helper(self):
        return "not an action"


class TestNaming(TestCase):

    def testNamesDerivedFromClassNames(self):
        self.assertEqual(DeployCommand.name, "deploy")
        self.assertEqual(DeployCommand.get_name(), "deploy")
        self.assertEqual(UserProfileController.name, "user-profile")
        self.assertEqual(DeployCommand.__typename__, "deploy-command")

    def testDescriptionsFromDocstringFirstLine(self):
        self.assertEqual(DeployCommand.description, "Deploy the application.")
        self.assertEqual(FailingCommand.description, "")
        self.assertEqual(UserProfileController.description, "User profile actions.")

    def testDeclaredNamingWins(self):
        self.assertEqual(NamedCommand.name, "custom")
        self.assertEqual(NamedCommand.description, "Declared description")

    def testSetNameIsInstanceLevel(self):
        command = DeployCommand(Input([]), None)
        command.set_name("ship")
        self.assertEqual(command.name, "ship")
        self.assertEqual(DeployCommand.name, "deploy")

    def testRepr(self):
        self.assertEqual(repr(DeployCommand), "<deploy-command 'deploy'>")
        command = DeployCommand(Input([]), None)
        self.assertEqual(repr(command), "deploy-command(name='deploy', description='Deploy the application.')")


class TestCommand(TestCase):

    def testRunCallsExecuteAndMapsNoneToZero(self):
        output, read = captured()
        command = DeployCommand(Input(["deploy", "web"]), output)
        self.assertEqual(command.run(), 0)
        self.assertEqual(read(), "deploying web\n")

    def testRunReturnsStatus(self):
        self.assertEqual(FailingCommand(Input([]), None).run(), 3)

    def testExecuteIsAbstract(self):
        with self.assertRaises(NotImplementedError):
            NamedCommand(Input([]), None).run()


class TestController(TestCase):

    def setUp(self):
        self.output, self.read = captured()

    def create(self, argv=()):
        controller = UserProfileController(Input(list(argv), script="demo"), self.output)
        controller.set_name("user")
        return controller

    def testActions(self):
        self.assertEqual(UserProfileController.actions(), {
            "clear-cache": "Clear the profile cache.",
            "help": "Show the help information of this group.",
            "show": "Show a profile.",
        })
        self.assertEqual(UserProfileController.action_method("clear-cache"), "clear_cache_command")

    def testRunAction(self):
        controller = self.create(["user/show", "eiko"])
        self.assertEqual(controller.run("show"), 0)
        self.assertEqual(self.read(), "profile of eiko\n")

    def testHyphenatedActionMapsToMethod(self):
        self.assertEqual(self.create().run("clear-cache"), 7)

    def testEmptyActionRunsHelp(self):
        self.assertEqual(self.create().run(""), 0)
        text = self.read()
        self.assertIn("demo user/<action> [options] [arguments]", text)
        self.assertIn("user/show", text)
        self.assertIn("user/clear-cache", text)
        self.assertNotIn("helper", text)

    def testUnknownActionReportsAndShowsHelp(self):
        self.assertEqual(self.create().run("missing"), 404)
        text = self.read()
        self.assertIn("ERROR: The sub-command 'missing' not exists in the group 'user'!", text)
        self.assertIn("Usage:", text)

    def testNonActionMethodsAreNotDispatched(self):
        self.assertEqual(self.create().run("helper"), 404)

    def testDelimiterAndStandaloneShapeHelp(self):
        controller = self.create()
        controller.set_delimiter(":")
        self.assertEqual(controller.run(), 0)
        self.assertIn("user:show", self.read())

        self.output, self.read = captured()
        controller = self.create()
        controller.set_standalone()
        controller.run("help")
        text = self.read()
        self.assertIn("demo <action> [options] [arguments]", text)
        self.assertNotIn("user/show", text)


if __name__ == "__main__":
    unittest.main()
