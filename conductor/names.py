"""
Name validation for commands and controller groups.

A command name starts with a letter and continues with letters, digits, '-' or
'_'; it may carry one namespace separator ("db:migrate"). A group name uses the
same alphabet without the separator.

Both grammars are constructor arguments; the group flag only picks which of
the two patterns applies.
"""
import re

from .faults import FaultCode, InvalidNameError, getdoc

COMMAND_PATTERN = r"[a-zA-Z][\w-]*(:[a-zA-Z][\w-]*)?"
GROUP_PATTERN = r"[a-zA-Z][\w-]*"

# Handled by the application itself, never dispatched.
RESERVED = frozenset({"help", "list", "version"})


class NameValidator:
    """
    Validate candidate command and group names.

    Examples
    - validate("db:migrate")              -> ok
    - validate("db:migrate", group=True)  -> InvalidNameError (no namespace in groups)
    - validate("   ")                     -> InvalidNameError
    """

    def __init__(self, command=COMMAND_PATTERN, group=GROUP_PATTERN, *, reserved=RESERVED):
        self._patterns = (re.compile(command), re.compile(group))
        self._reserved = frozenset(reserved)

    @property
    def reserved(self):
        return self._reserved

    def pattern(self, group=False):
        return self._patterns[bool(group)].pattern

    def validate(self, name, group=False):
        kind = "group" if group else "command"

        if not isinstance(name, str) or not name.strip():
            raise InvalidNameError(
                "the %s name must be a non-empty string, got %r" % (kind, name),
                title="invalid name",
                code=FaultCode.INVALID_NAME,
                hint="give the %s a name such as 'deploy'" % kind,
                name=name,
                docs=getdoc(FaultCode.INVALID_NAME),
            )

        if not self._patterns[bool(group)].fullmatch(name):
            raise InvalidNameError(
                "the %s name %r must match %s" % (kind, name, self.pattern(group)),
                title="invalid name",
                code=FaultCode.INVALID_NAME,
                hint="start with a letter and use letters, digits, '-' or '_'",
                name=name,
                docs=getdoc(FaultCode.INVALID_NAME),
            )

        if name in self._reserved:
            raise InvalidNameError(
                "the %s name %r is reserved for an internal command" % (kind, name),
                title="reserved name",
                code=FaultCode.INVALID_NAME,
                hint="pick another name; %s are handled by the application" % ", ".join(sorted(self._reserved)),
                name=name,
                docs=getdoc(FaultCode.INVALID_NAME),
            )


__all__ = (
    "COMMAND_PATTERN",
    "GROUP_PATTERN",
    "RESERVED",
    "NameValidator",
)
