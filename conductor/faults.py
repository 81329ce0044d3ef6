"""
Conductor faults (registration and dispatch errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every fault the toolkit raises,
  grouped by domain (dispatch, naming, registration, handlers, controllers).
- CommandException: base type carrying a message plus options; renders itself
  with rich (__rich__) and knows how to surface itself (__trigger__).
- trigger(): single entry point used by the application to surface a fault.
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- InvalidNameError                 malformed, empty or reserved name
- DuplicateRegistrationError       a command name registered twice
- UnknownHandlerTypeError          handler missing, not a command class, not invocable
- UnknownControllerTypeError       controller missing, not importable, not a controller class
- UnknownCommandError / UnknownControllerError
                                   direct (non-believable) run of an unregistered name

Registration faults are raised immediately: they signal programmer error and
are never retried. A dispatch miss is not a fault; the application reports it
through its output and returns a status code.

Integration
- In non-shell mode, trigger() raises the fault.
- In shell mode, the fault is printed to stderr via rich and the process exits
  with status 1 (or returns, when the fault is deferred).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - dispatch (1110x)
      • UNKNOWN_COMMAND, UNKNOWN_CONTROLLER
    - naming (2110x)
      • INVALID_NAME
    - registration (2111x)
      • DUPLICATE_COMMAND
    - handlers (2112x)
      • EMPTY_NAME_OR_HANDLER, INVALID_HANDLER_TYPE, HANDLER_CONSTRUCT_FAILED
    - controllers (2113x)
      • EMPTY_NAME_OR_CONTROLLER, CONTROLLER_TYPE_NOT_FOUND,
        INVALID_CONTROLLER_TYPE, CONTROLLER_CONSTRUCT_FAILED

    normalize() lets the host remap codes to its own labels.
    """
    # --- dispatch (11xxx) ---
    UNKNOWN_COMMAND             = 11101
    UNKNOWN_CONTROLLER          = 11102

    # --- naming (21xxx) ---
    INVALID_NAME                = 21101

    # --- registration (21xxx) ---
    DUPLICATE_COMMAND           = 21111

    # --- handlers (21xxx) ---
    EMPTY_NAME_OR_HANDLER       = 21121
    INVALID_HANDLER_TYPE        = 21122
    HANDLER_CONSTRUCT_FAILED    = 21123

    # --- controllers (21xxx) ---
    EMPTY_NAME_OR_CONTROLLER    = 21131
    CONTROLLER_TYPE_NOT_FOUND   = 21132
    INVALID_CONTROLLER_TYPE     = 21133
    CONTROLLER_CONSTRUCT_FAILED = 21134

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base fault. The message is positional; everything else travels in options.

    Common options
    - code: FaultCode
    - title: short headline ("duplicate command")
    - hint: one actionable sentence
    - tool: the Application surfacing the fault (program name in the header)
    - shell, fancy, colorful, deferred: rendering/runtime flags
    - console: rich Console to print to (defaults to a stderr console)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        tool = self.options.get("tool")
        prog = text(getattr(main, "__prog__", getattr(tool, "name", None) or "console"), styler("prog-name"))

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        self.options.get("console", console).print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidNameError(CommandException): ...

class DuplicateRegistrationError(CommandException): ...
class DuplicateCommandError(DuplicateRegistrationError): ...

class UnknownHandlerTypeError(CommandException): ...
class EmptyNameOrHandlerError(UnknownHandlerTypeError): ...
class InvalidHandlerTypeError(UnknownHandlerTypeError): ...
class HandlerConstructError(UnknownHandlerTypeError): ...

class UnknownControllerTypeError(CommandException): ...
class EmptyNameOrControllerError(UnknownControllerTypeError): ...
class ControllerTypeNotFoundError(UnknownControllerTypeError): ...
class InvalidControllerTypeError(UnknownControllerTypeError): ...
class ControllerConstructError(UnknownControllerTypeError): ...

class UnknownCommandError(CommandException): ...
class UnknownControllerError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when nothing is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "CommandException",
    "InvalidNameError",
    "DuplicateRegistrationError",
    "DuplicateCommandError",
    "UnknownHandlerTypeError",
    "EmptyNameOrHandlerError",
    "InvalidHandlerTypeError",
    "HandlerConstructError",
    "UnknownControllerTypeError",
    "EmptyNameOrControllerError",
    "ControllerTypeNotFoundError",
    "InvalidControllerTypeError",
    "ControllerConstructError",
    "UnknownCommandError",
    "UnknownControllerError",
    "trigger",
    "getdoc",
)
