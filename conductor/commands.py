"""
Conductor capabilities: the classes that commands and controllers derive from.

What this module provides
- Command: an independent command. Subclasses implement execute(input, output);
  the application constructs them with the (input, output) context, sets the
  dispatch name and the owning application, then calls run().
- Controller: a group of actions. Each public method named '<action>_command'
  is an action; run(action) picks and calls it. An empty action falls back to
  default_action ("help"), which lists the group's actions.

Naming
- A class that does not declare `name` gets one derived from its class name:
  DeployCommand → "deploy", UserProfileController → "user-profile".
- `description` defaults to the first line of the class docstring.
- get_name() is class-level (used by the self-naming registration shortcut);
  set_name() is instance-level, so dispatching never mutates the class.

Quick start
    from conductor import Application, Command, Controller

    class GreetCommand(Command):
        \"\"\"Say hello.\"\"\"

        def execute(self, input, output):
            output.success("hello %s" % input.get_opt("name", "world"))

    class SiteController(Controller):
        \"\"\"Site management.\"\"\"

        def about_command(self, input, output):
            \"\"\"Show the about page.\"\"\"
            output.write("about")

    app = Application("demo")
    app.command(GreetCommand)
    app.controller(SiteController)
    app.run()
"""
import inspect

from .utils import Unset, hyphenate


def _summary(object):
    # First docstring line, or an empty string. Accepts raw docstrings too.
    doc = object if isinstance(object, str) else inspect.getdoc(object)
    for line in (doc or "").splitlines():
        if line := line.strip():
            return line
    return ""


class CommandType(type):
    """
    Metaclass that fills in the naming metadata of command and controller classes.

    Responsibilities
    - __typename__: hyphenated class name for diagnostics (HomeController → home-controller).
    - name: derived from the class name minus the suffixes listed in __suffixes__,
      unless the class body declares it.
    - description: first docstring line of the class body, unless declared.
    - stable __repr__/__rich_repr__ driven by __displayable__.
    """
    __suffixes__ = ()
    __displayable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(cls, name, bases, namespace | {"__typename__": hyphenate(name)}, **options)

        if "name" not in namespace:
            self.name = hyphenate(name, *self.__suffixes__)
        if "description" not in namespace:
            self.description = _summary(namespace.get("__doc__") or "")

        return self

    def __repr__(self):
        return f"<{self.__typename__} {self.name!r}>"


class Runnable(metaclass=CommandType):
    """
    Shared construction and naming contract of commands and controllers.

    Instances receive the invocation context (input, output) untouched; the
    application never inspects it.
    """
    __displayable__ = ("name", "description")

    name = Unset
    description = Unset

    def __init__(self, input, output):
        self.input = input
        self.output = output
        self.app = None

    @classmethod
    def get_name(cls):
        return cls.name

    def set_name(self, name):
        self.name = name

    def set_app(self, app):
        self.app = app

    def __repr__(self):
        return "%s(%s)" % (type(self).__typename__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))

    def __rich_repr__(self):
        for name in type(self).__displayable__:
            yield name, getattr(self, name)


class Command(Runnable):
    """
    Base class of independent commands.

    Subclasses implement execute(input, output) and return a status code;
    returning None means success (0).
    """
    __suffixes__ = ("Command",)

    def run(self):
        status = self.execute(self.input, self.output)
        return 0 if status is None else status

    def execute(self, input, output):
        raise NotImplementedError(f"{type(self).__typename__} must implement execute(input, output)")


class Controller(Runnable):
    """
    Base class of controller groups.

    Actions
    - every method named '<action>_command' is an action; hyphens in the
      dispatched action map to underscores ("clear-cache" → clear_cache_command).
    - run("") runs default_action.
    - an unknown action prints an error plus the group help and returns 404.

    Runtime settings (set by the application before run)
    - delimiter: separator between group and action, used in help output.
    - standalone: the controller is the whole application; help shows bare actions.
    """
    __suffixes__ = ("Controller", "Group")
    __displayable__ = ("name", "description", "delimiter", "standalone")

    action_suffix = "_command"
    default_action = "help"

    def __init__(self, input, output):
        super().__init__(input, output)
        self.delimiter = "/"
        self.standalone = False

    def set_delimiter(self, delimiter):
        self.delimiter = delimiter or "/"

    def set_standalone(self, standalone=True):
        self.standalone = bool(standalone)

    @classmethod
    def action_method(cls, action):
        return action.replace("-", "_") + cls.action_suffix

    @classmethod
    def actions(cls):
        """
        Return {action: description} for every action, sorted by action name.
        """
        actions = {}
        for attribute, method in inspect.getmembers(cls, callable):
            if attribute.startswith("_") or not attribute.endswith(cls.action_suffix):
                continue
            if not (action := attribute[:-len(cls.action_suffix)]):
                continue
            actions[action.replace("_", "-")] = _summary(method)
        return actions

    def run(self, action=""):
        action = action or self.default_action
        method = getattr(self, self.action_method(action), None)

        if not callable(method):
            self.output.lite_error(f"The sub-command '{action}' not exists in the group '{self.name}'!")
            self.help_command(self.input, self.output)
            return 404

        status = method(self.input, self.output)
        return 0 if status is None else status

    def help_command(self, input, output):
        """Show the help information of this group."""
        route = "" if self.standalone else f"{self.name}{self.delimiter}"
        script = getattr(input, "script", "")

        output.help_panel(
            f"{script} {route}<action> [options] [arguments]".strip(),
            commands={f"{route}{action}": description for action, description in self.actions().items()},
            description=self.description,
        )


__all__ = (
    "Runnable",
    "Command",
    "Controller",
)
