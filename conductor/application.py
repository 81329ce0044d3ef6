"""
Conductor application: registration API, dispatcher and run lifecycle.

What this module provides
- Application: owns one Registry, the invocation context (Input, Output) and
  the runtime flags. It registers commands and controller groups, resolves an
  invocation name into a dispatch target and runs it.

Dispatch (per call, nothing persists between calls)
    Start → Classifying → Invoking            (command or controller action)
                        → SuggestingOrListing (nothing matched, status 404)
    → Done

Invocation protocol
- callable handler: handler(input, output) or handler(), by the arity recorded
  at registration; the return value is the status.
- Command subclass: constructed with (input, output), named, attached to the
  application, then run().
- Controller subclass: constructed with (input, output), named, attached,
  given the delimiter and the standalone flag, then run(action).
- None as a result means 0.

Events
- before_run(app), after_run(app, status), run_error(app, fault),
  stop_run(app, status), not_found(app, name). A not_found listener returning
  True marks the miss as handled: nothing is printed and 404 is returned.

Concurrency
- Registration must complete before the first dispatch; the registry is read
  without locks afterwards.
"""
import sys
from collections import defaultdict
from collections.abc import Mapping

from rich.markup import escape

from .commands import Command, Controller
from .faults import *
from .input import Input
from .logger import get_logger
from .output import Output
from .registry import Registry
from .routing import *

logger = get_logger(__name__)

NOT_FOUND = 404

EVENTS = (
    "before_run",
    "after_run",
    "run_error",
    "stop_run",
    "not_found",
)

INTERNAL_COMMANDS = {
    "help": "Show the application help information",
    "list": "List all group and independent commands",
    "version": "Show the application version information",
}


class Application:
    """
    Console application: a registry of commands/groups plus a dispatcher.

    Parameters
    - name, version, description: shown by help, version and fault headers.
    - input: Input (parsed from sys.argv when omitted).
    - output: Output (a default rich renderer when omitted).
    - registry: Registry to use (a fresh one when omitted).
    - delimiter: separator between group and action, "/" by default.
    - shell: render faults raised while running instead of propagating them.
    - fancy, colorful: rendering flags for faults and the default Output.
    """

    def __init__(
            self,
            name="console",
            version="0.0.1",
            description="",
            input=None,
            output=None,
            *,
            registry=None,
            delimiter=DELIMITER,
            shell=False,
            fancy=False,
            colorful=True
    ):
        self.name = name
        self.version = version
        self.description = description
        self.input = input if input is not None else Input()
        self.output = output if output is not None else Output(colorful=colorful, fancy=fancy)
        self.registry = registry if registry is not None else Registry()
        self.delimiter = delimiter or DELIMITER
        self.shell = shell
        self.fancy = fancy
        self.colorful = colorful
        self._events = defaultdict(list)

    # -- registration -----------------------------------------------------

    def command(self, name, handler=None, description=None):
        """
        Register an independent command; see Registry.register_command().
        """
        self.registry.register_command(name, handler, description)
        return self

    def add_command(self, name, handler=None, description=None):
        return self.command(name, handler, description)

    def commands(self, commands):
        """
        Register many commands: a {name: handler} mapping, or an iterable of
        Command subclasses named by themselves.
        """
        if isinstance(commands, Mapping):
            for name, handler in commands.items():
                self.command(name, handler)
        else:
            for handler in commands:
                self.command(handler)
        return self

    def controller(self, name, controller=None):
        """
        Register a controller group; see Registry.register_controller().
        """
        self.registry.register_controller(name, controller)
        return self

    def add_controller(self, name, controller=None):
        return self.controller(name, controller)

    def add_group(self, name, controller=None):
        return self.controller(name, controller)

    def controllers(self, controllers):
        """
        Register many groups: a {name: controller} mapping, or an iterable of
        Controller subclasses named by themselves.
        """
        if isinstance(controllers, Mapping):
            for name, controller in controllers.items():
                self.controller(name, controller)
        else:
            for controller in controllers:
                self.controller(controller)
        return self

    def is_command(self, name):
        return self.registry.is_command(name)

    def is_controller(self, name):
        return self.registry.is_controller(name)

    def get_command_names(self):
        return list(self.registry.command_names())

    def get_controller_names(self):
        return list(self.registry.controller_names())

    # -- events -----------------------------------------------------------

    def on(self, event, listener):
        """
        Subscribe listener to event; usable as a decorator: @app.on("not_found").
        """
        if event not in EVENTS:
            raise ValueError(f"unknown event {event!r}, expected one of {', '.join(EVENTS)}")
        if not callable(listener):
            raise TypeError("on() listener must be callable")
        self._events[event].append(listener)
        return listener

    def off(self, event, listener=None):
        if listener is None:
            self._events.pop(event, None)
        elif listener in self._events.get(event, ()):
            self._events[event].remove(listener)

    def fire(self, event, *args):
        """
        Call every listener of event with args; True when any of them returned True.
        """
        handled = False
        for listener in list(self._events.get(event, ())):
            handled |= listener(*args) is True
        return handled

    # -- dispatch ---------------------------------------------------------

    def dispatch(self, name):
        """
        Resolve name and run the matching command or controller action.

        Returns the handler status, or 404 when nothing matched.
        """
        target = classify(self.registry, name, self.delimiter)
        logger.debug("dispatching %r as %r", name, target)

        match target:
            case IndependentCommand(command):
                return self.run_command(command, True)
            case ControllerAction(group, action):
                return self.run_action(group, action, True)

        return self.not_found(target.name)

    def not_found(self, name):
        """
        Report a dispatch miss: the not_found event first, then suggestions or the listing.
        """
        logger.info("command %r not found", name)

        if self.fire("not_found", self, name):
            return NOT_FOUND

        self.output.lite_error(f"The console command '{name}' not exists!")

        similar = suggest(name, self.get_controller_names() + self.get_command_names())
        if similar:
            self.output.write("Maybe what you mean is: [info]%s[/info]" % escape(", ".join(similar)))
        else:
            self.show_command_list()

        return NOT_FOUND

    def run_command(self, name, believable=False):
        """
        Run an independent command by name.

        believable: the name was resolved by dispatch already, skip the existence check.
        """
        if not believable and not self.is_command(name):
            raise UnknownCommandError(
                "the independent command %r does not exist" % name,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                hint="run '%s list' to see the registered commands" % self.input.script,
                name=name,
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            )

        entry = self.registry.get_command(name)

        if entry.kind == "callable":
            status = entry.handler(self.input, self.output) if entry.arity else entry.handler()
        else:
            object = entry.handler(self.input, self.output)

            if not isinstance(object, Command):
                raise HandlerConstructError(
                    "the command class of %r must build an instance of %s" % (name, Command.__qualname__),
                    title="handler construct failed",
                    code=FaultCode.HANDLER_CONSTRUCT_FAILED,
                    hint="do not return foreign objects from __new__",
                    name=name,
                    docs=getdoc(FaultCode.HANDLER_CONSTRUCT_FAILED),
                )

            object.set_name(name)
            object.set_app(self)
            status = object.run()

        return 0 if status is None else status

    def run_action(self, name, action, believable=False, standalone=False):
        """
        Run an action of a controller group by name; an empty action runs the default one.

        believable: the name was resolved by dispatch already, skip the existence check.
        standalone: the controller is the whole application.
        """
        if not believable and not self.is_controller(name):
            raise UnknownControllerError(
                "the controller group %r does not exist" % name,
                title="unknown group",
                code=FaultCode.UNKNOWN_CONTROLLER,
                hint="run '%s list' to see the registered groups" % self.input.script,
                name=name,
                docs=getdoc(FaultCode.UNKNOWN_CONTROLLER),
            )

        object = self.registry.get_controller(name)(self.input, self.output)

        if not isinstance(object, Controller):
            raise ControllerConstructError(
                "the controller class of group %r must build an instance of %s" % (name, Controller.__qualname__),
                title="controller construct failed",
                code=FaultCode.CONTROLLER_CONSTRUCT_FAILED,
                hint="do not return foreign objects from __new__",
                name=name,
                docs=getdoc(FaultCode.CONTROLLER_CONSTRUCT_FAILED),
            )

        object.set_name(name)
        object.set_app(self)
        object.set_delimiter(self.delimiter)
        object.set_standalone(standalone)

        status = object.run(action)
        return 0 if status is None else status

    # -- lifecycle --------------------------------------------------------

    def run(self, exit=True):
        """
        Run the application with its Input and return (or exit with) the status.

        Internal commands (help, list, version and the -h/--help, -V/--version
        switches) are answered here; everything else goes through dispatch().
        """
        self.fire("before_run", self)

        try:
            status = self._run_internal()
            if status is None:
                status = self.dispatch(self.input.command)
        except CommandException as exception:
            logger.error("run failed [%s]: %s", exception.code, exception.message)
            self.fire("run_error", self, exception)
            trigger(
                exception,
                tool=self,
                shell=self.shell,
                fancy=self.fancy,
                colorful=self.colorful,
                deferred=True
            )
            status = 1

        self.fire("after_run", self, status)
        return self.stop(status, exit)

    def _run_internal(self):
        command = self.input.command

        if command == "version" or (not command and self.input.has_opt("V", "version")):
            self.show_version()
            return 0
        if command == "help" or (not command and self.input.has_opt("h", "help")):
            self.show_help()
            return 0
        if command in ("", "list"):
            self.show_command_list()
            return 0
        return None

    def stop(self, status=0, exit=True):
        self.fire("stop_run", self, status)
        if exit:
            sys.exit(status)
        return status

    # -- rendering --------------------------------------------------------

    def show_version(self):
        self.output.write("[title]%s[/title] version [info]%s[/info]" % (escape(self.name), escape(str(self.version))))

    def show_help(self):
        script = self.input.script
        self.output.help_panel(
            f"{script} [route|command] [arguments] [--options]".strip(),
            commands=INTERNAL_COMMANDS,
            options={
                "-h, --help": "Display this help message",
                "-V, --version": "Show the application version information",
            },
            examples=[
                f"{script} list".strip(),
                f"{script} <group>{self.delimiter}<action>".strip(),
                f"{script} <group>{self.delimiter}help".strip(),
            ],
            description=self.description or f"{self.name} {self.version}",
        )

    def show_command_list(self):
        """
        Render every group and independent command with its description.
        """
        script = self.input.script
        groups = {
            name: self.registry.get_controller(name).description or "No description"
            for name in self.registry.controller_names()
        }
        commands = {name: self.registry.describe(name, "No description") for name in self.registry.command_names()}

        self.output.write("[comment]Usage:[/comment]\n  %s\n" % escape(f"{script} [route|command] [arguments] [--options]".strip()))
        self.output.multi_list({
            "Group Commands": groups or "... No group command (controller) registered",
            "Independent Commands": commands or "... No independent command registered",
            "Internal Commands": INTERNAL_COMMANDS,
        })
        self.output.write("\nMore command information, please use: [info]%s <group>%shelp[/info]" % (escape(script), escape(self.delimiter)))


__all__ = (
    "NOT_FOUND",
    "EVENTS",
    "INTERNAL_COMMANDS",
    "Application",
)
