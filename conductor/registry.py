"""
Command and controller registry.

The registry owns three mappings, all filled during the registration phase and
read-only while dispatching:
- commands:     name → CommandEntry (independent commands)
- controllers:  name → Controller subclass (groups)
- descriptions: name → text shown by listings and help

Handlers are classified once, here. A CommandEntry records whether the handler
is a Command subclass ("type") or a plain callable ("callable"), and for
callables how many positional arguments they take (0 or 2), so dispatching
never has to inspect the handler again.

Asymmetry
- registering a command name twice raises DuplicateCommandError.
- registering a group name twice silently replaces the first controller.
"""
import inspect
from collections import namedtuple
from types import MappingProxyType

from .commands import Command, Controller, _summary
from .faults import *
from .logger import get_logger
from .names import NameValidator
from .utils import resolve

logger = get_logger(__name__)

CommandEntry = namedtuple("CommandEntry", ("name", "handler", "kind", "arity"))


def _arity(handler):
    """
    Return how many positional arguments a callable handler accepts: 2 or 0.

    (input, output) wins when both bindings work. Callables whose signature
    cannot be inspected are assumed to take (input, output). None when neither
    shape binds.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return 2

    for arity in (2, 0):
        try:
            signature.bind(*(None,) * arity)
        except TypeError:
            continue
        return arity
    return None


class Registry:
    """
    Bookkeeping for independent commands and controller groups.

    The command and group namespaces are independent: the same name may be a
    command and a group at once, in which case dispatch prefers the command.
    """

    def __init__(self, validator=None):
        self.validator = validator or NameValidator()
        self._commands = {}
        self._controllers = {}
        self._descriptions = {}

    def register_command(self, name, handler=None, description=None):
        """
        Register an independent command.

        Forms
        - register_command("deploy", DeployCommand)
        - register_command("deploy", "app.commands:DeployCommand")
        - register_command("hello", lambda: 0, "say hello")
        - register_command("hello", lambda input, output: 0)
        - register_command(DeployCommand)          # name taken from DeployCommand.get_name()

        Raises
        - EmptyNameOrHandlerError, InvalidNameError, DuplicateCommandError,
          InvalidHandlerTypeError (see conductor.faults).
        """
        if handler is None and isinstance(name, type) and issubclass(name, Command):
            handler, name = name, name.get_name()

        if not name or handler in (None, ""):
            raise EmptyNameOrHandlerError(
                "command 'name' and 'handler' are not allowed to be empty, name: %r" % (name,),
                title="empty name or handler",
                code=FaultCode.EMPTY_NAME_OR_HANDLER,
                hint="pass a name and a handler, or a Command subclass alone",
                name=name,
                docs=getdoc(FaultCode.EMPTY_NAME_OR_HANDLER),
            )

        self.validator.validate(name)

        if name in self._commands:
            raise DuplicateCommandError(
                "command %r has been registered already" % name,
                title="duplicate command",
                code=FaultCode.DUPLICATE_COMMAND,
                hint="each command name can be registered only once",
                name=name,
                docs=getdoc(FaultCode.DUPLICATE_COMMAND),
            )

        if isinstance(handler, str):
            try:
                handler = resolve(handler)
            except LookupError as exception:
                raise InvalidHandlerTypeError(
                    "the command class of %r does not exist: %s" % (name, exception),
                    title="invalid handler type",
                    code=FaultCode.INVALID_HANDLER_TYPE,
                    hint="reference the class as 'package.module:ClassName'",
                    name=name,
                    docs=getdoc(FaultCode.INVALID_HANDLER_TYPE),
                ) from None

        if isinstance(handler, type):
            if not issubclass(handler, Command):
                raise InvalidHandlerTypeError(
                    "the command class %r of %r must be a subclass of %s" % (handler.__qualname__, name, Command.__qualname__),
                    title="invalid handler type",
                    code=FaultCode.INVALID_HANDLER_TYPE,
                    hint="derive the class from conductor.Command",
                    name=name,
                    docs=getdoc(FaultCode.INVALID_HANDLER_TYPE),
                )
            entry = CommandEntry(name, handler, "type", None)
            description = description or handler.description
        elif callable(handler):
            if (arity := _arity(handler)) is None:
                raise InvalidHandlerTypeError(
                    "the command handler of %r must accept no arguments or (input, output)" % name,
                    title="invalid handler type",
                    code=FaultCode.INVALID_HANDLER_TYPE,
                    hint="define the handler as 'def handler(input, output)' or 'def handler()'",
                    name=name,
                    docs=getdoc(FaultCode.INVALID_HANDLER_TYPE),
                )
            entry = CommandEntry(name, handler, "callable", arity)
            description = description or _summary(handler)
        else:
            raise InvalidHandlerTypeError(
                "the command handler of %r must be a subclass of %s or a callable" % (name, Command.__qualname__),
                title="invalid handler type",
                code=FaultCode.INVALID_HANDLER_TYPE,
                hint="register a Command subclass, a function or an object with __call__",
                name=name,
                docs=getdoc(FaultCode.INVALID_HANDLER_TYPE),
            )

        self._commands[name] = entry
        if description:
            self._descriptions[name] = description

        logger.debug("registered command %r (%s)", name, entry.kind)

    def register_controller(self, name, controller=None):
        """
        Register a controller group.

        Forms
        - register_controller("site", SiteController)
        - register_controller("site", "app.controllers:SiteController")
        - register_controller(SiteController)       # name taken from SiteController.get_name()

        A second registration under the same name replaces the first one.

        Raises
        - EmptyNameOrControllerError, InvalidNameError, ControllerTypeNotFoundError,
          InvalidControllerTypeError (see conductor.faults).
        """
        if controller is None and isinstance(name, type) and issubclass(name, Controller):
            controller, name = name, name.get_name()

        if not name or controller in (None, ""):
            raise EmptyNameOrControllerError(
                "group 'name' and 'controller' are not allowed to be empty, name: %r, controller: %r" % (name, controller),
                title="empty name or controller",
                code=FaultCode.EMPTY_NAME_OR_CONTROLLER,
                hint="pass a name and a controller, or a Controller subclass alone",
                name=name,
                docs=getdoc(FaultCode.EMPTY_NAME_OR_CONTROLLER),
            )

        self.validator.validate(name, True)

        if isinstance(controller, str):
            try:
                controller = resolve(controller)
            except LookupError as exception:
                raise ControllerTypeNotFoundError(
                    "the controller class of group %r does not exist: %s" % (name, exception),
                    title="controller not found",
                    code=FaultCode.CONTROLLER_TYPE_NOT_FOUND,
                    hint="reference the class as 'package.module:ClassName'",
                    name=name,
                    docs=getdoc(FaultCode.CONTROLLER_TYPE_NOT_FOUND),
                ) from None

        if not isinstance(controller, type) or not issubclass(controller, Controller):
            raise InvalidControllerTypeError(
                "the controller of group %r must be a subclass of %s" % (name, Controller.__qualname__),
                title="invalid controller type",
                code=FaultCode.INVALID_CONTROLLER_TYPE,
                hint="derive the class from conductor.Controller",
                name=name,
                docs=getdoc(FaultCode.INVALID_CONTROLLER_TYPE),
            )

        if name in self._controllers:
            logger.debug("group %r re-registered, %r replaces %r", name, controller, self._controllers[name])

        self._controllers[name] = controller

        logger.debug("registered group %r", name)

    def is_command(self, name):
        return name in self._commands

    def is_controller(self, name):
        return name in self._controllers

    def command_names(self):
        return tuple(self._commands)

    def controller_names(self):
        return tuple(self._controllers)

    def get_command(self, name):
        return self._commands[name]

    def get_controller(self, name):
        return self._controllers[name]

    def describe(self, name, default=""):
        if name in self._descriptions:
            return self._descriptions[name]
        if name in self._controllers:
            return self._controllers[name].description or default
        return default

    @property
    def commands(self):
        return MappingProxyType(self._commands)

    @property
    def controllers(self):
        return MappingProxyType(self._controllers)

    @property
    def descriptions(self):
        return MappingProxyType(self._descriptions)


__all__ = (
    "CommandEntry",
    "Registry",
)
