"""
Raw invocation data handed to commands and controllers.

Input only tokenizes; it never validates options. Tokens are classified as:
- "--name=value"  → options["name"] = "value"
- "--name"        → options["name"] = True
- "-abc"          → options["a"] = options["b"] = options["c"] = True
- "--"            → every following token is positional
- anything else   → positional; the first positional is the command name
"""
import os.path
import shlex
import sys
from collections.abc import Iterable


class Input:
    """
    Tokenized argv-like data.

    Parameters
    - argv:
      • None: read tokens from sys.argv[1:].
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: pre-tokenized sequence; each element is trimmed.
    - script: program name shown in usage lines (defaults to sys.argv[0]).
    """

    def __init__(self, argv=None, script=None):
        if argv is None:
            tokens = sys.argv[1:]
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = []
            for item in argv:
                if not isinstance(item, str):
                    raise TypeError("Input() argument must be a string or an iterable of strings")
                if item := item.strip():
                    tokens.append(item)
        else:
            raise TypeError("Input() argument must be a string or an iterable of strings")

        self.script = script if script is not None else os.path.basename(sys.argv[0] if sys.argv else "")
        self.tokens = tuple(tokens)
        self.command = ""
        self.args = []
        self.options = {}

        positional = False
        for token in self.tokens:
            if positional or not token.startswith("-") or token == "-":
                if not self.command:
                    self.command = token
                else:
                    self.args.append(token)
            elif token == "--":
                positional = True
            elif token.startswith("--"):
                name, separator, value = token[2:].partition("=")
                self.options[name] = value if separator else True
            else:
                for name in token[1:]:
                    self.options[name] = True

    def get_command(self):
        return self.command

    def set_command(self, command):
        self.command = command

    def get_args(self):
        return list(self.args)

    def get_arg(self, index, default=None):
        try:
            return self.args[index]
        except IndexError:
            return default

    def get_opt(self, name, default=None):
        return self.options.get(name, default)

    def has_opt(self, *names):
        return any(name in self.options for name in names)

    def __repr__(self):
        return "Input(command=%r, args=%r, options=%r)" % (self.command, self.args, self.options)


__all__ = ("Input",)
