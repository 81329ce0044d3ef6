"""
Conductor utilities (small helpers shared by the registry and the dispatcher)

Overview
- UnsetType / Unset
  • Singleton sentinel for “argument not provided”, distinct from None.
  • Falsey, printable as "Unset", non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a default while keeping None/0/""/[] untouched.

- hyphenate(name, *suffixes)
  • Turn a class name into a command-style name (DeployCommand → deploy,
    UserProfileController → user-profile).

- resolve(reference)
  • Import a "package.module:Attribute" reference and return the attribute.
    Used for handlers and controllers registered by import path.

Stability
- Names listed in __all__ are re-exported; the rest may change.
"""
import functools
import importlib
import re
from typing import final


@final
class UnsetType:
    """
    Sentinel type representing a value that was not provided.

    Registration signatures use Unset where None would be ambiguous, for
    example an omitted description versus a description explicitly cleared.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


@functools.cache
def hyphenate(name, /, *suffixes):
    """
    Derive a dispatch name from a class name.

    The camel-case class name is split on upper-case boundaries, joined with
    hyphens and lowered. Any trailing word listed in suffixes is dropped first,
    unless nothing would remain.

    - hyphenate("DeployCommand", "Command")          -> "deploy"
    - hyphenate("UserProfileController", "Controller") -> "user-profile"
    - hyphenate("Command", "Command")                -> "command"
    """
    if not isinstance(name, str):
        raise TypeError("hyphenate() argument must be a string")

    for suffix in suffixes:
        if name.endswith(suffix) and name != suffix:
            name = name[:-len(suffix)]
            break

    return re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower()


def resolve(reference, /):
    """
    Import and return the object designated by "package.module:Attribute".

    Nested attributes are allowed after the colon ("pkg.mod:Outer.Inner").

    Raises
    - TypeError: reference is not a string.
    - LookupError: the module cannot be imported or the attribute is missing.
      Callers translate it into a registration fault.
    """
    if not isinstance(reference, str):
        raise TypeError("resolve() argument must be a string")

    module, separator, qualname = reference.strip().partition(":")
    if not separator or not module or not qualname:
        raise LookupError(f"reference {reference!r} must look like 'package.module:Attribute'")

    try:
        object = importlib.import_module(module)
    except ImportError:
        raise LookupError(f"unable to import module {module!r}") from None

    for attribute in qualname.split("."):
        try:
            object = getattr(object, attribute)
        except AttributeError:
            raise LookupError(f"module {module!r} has no attribute {qualname!r}") from None

    return object


Unset = UnsetType()
"""
Sentinel for “not provided”. Falsey, singleton, distinct from None.
"""


__all__ = (
    # Functions
    "coalesce",
    "hyphenate",
    "resolve",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
