"""
Route resolution: turn a raw invocation name into a dispatch target.

Targets
- IndependentCommand(name)        a registered command, by exact name
- ControllerAction(group, action) a registered group plus an action ("" = default)
- NotFound(name)                  nothing matched; name is the raw input

Rules (classify)
1. An exact command name wins, even when a group of the same name exists.
2. Otherwise the name is split into group/action by split_route().
3. A registered group yields ControllerAction, anything else NotFound.

Suggestions
- similarity() is a character-overlap percentage: twice the number of
  characters in common substrings (longest first, then recursively on both
  sides) over the combined length.
- suggest() keeps candidates scoring at least 45%.
"""
import difflib
from collections import namedtuple

IndependentCommand = namedtuple("IndependentCommand", ("name",))
ControllerAction = namedtuple("ControllerAction", ("group", "action"))
NotFound = namedtuple("NotFound", ("name",))

DELIMITER = "/"
THRESHOLD = 45


def split_route(name, delimiter=DELIMITER):
    """
    Split "group<delimiter>action" into (group, action).

    - no delimiter, or a delimiter only at index 0: (name, "")
    - empty segments are dropped: "home//index" → ("home", "index")
    - one segment left: "home/" → ("home", "")
    - three or more segments: the last two are used,
      "a/b/c" → ("b", "c"), "a/b/c/d" → ("c", "d")
    """
    delimiter = delimiter or DELIMITER

    if name.find(delimiter) <= 0:
        return name, ""

    segments = [segment for segment in name.split(delimiter) if segment]

    # Deep names: only the trailing pair routes.
    if len(segments) > 2:
        segments = segments[-2:]

    group, action = (segments + [""])[:2]
    return group, action


def classify(registry, name, delimiter=DELIMITER):
    """
    Classify name against the registry; see the module docstring for the rules.
    """
    if registry.is_command(name):
        return IndependentCommand(name)

    group, action = split_route(name, delimiter)

    if registry.is_controller(group):
        return ControllerAction(group, action)

    return NotFound(name)


def similarity(first, second):
    """
    Return the character-overlap percentage of two strings (0.0 - 100.0).

    Two empty strings score 0, as does any pair without a common character.
    """
    if not first or not second:
        return 0.0
    matcher = difflib.SequenceMatcher(None, first, second, autojunk=False)
    matches = sum(block.size for block in matcher.get_matching_blocks())
    return matches * 2.0 * 100.0 / (len(first) + len(second))


def suggest(name, candidates, threshold=THRESHOLD):
    """
    Return the candidates whose similarity to name reaches threshold, in order.

    Scores are truncated to whole percents before the comparison.
    """
    return [candidate for candidate in candidates if int(similarity(name, candidate)) >= threshold]


__all__ = (
    "IndependentCommand",
    "ControllerAction",
    "NotFound",
    "DELIMITER",
    "THRESHOLD",
    "split_route",
    "classify",
    "similarity",
    "suggest",
)
