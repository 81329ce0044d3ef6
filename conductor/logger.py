"""
Conductor logging, rendered through rich.

Every module asks get_logger(__name__) for a logger under the "conductor"
hierarchy. The rich handler lives on the "conductor" root logger only, so a
record is printed once however many modules log.

Levels
- WARNING by default: registration and dispatch decisions stay silent.
- configure(verbose=True) shows them (DEBUG); configure(quiet=True) keeps errors only.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

ROOT = "conductor"


def get_logger(name):
    """
    Return a logger under the conductor hierarchy; "plugins" → "conductor.plugins".
    """
    root = logging.getLogger(ROOT)

    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    if name == ROOT or name.startswith(ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT}.{name}")


def configure(verbose=False, quiet=False):
    """
    Set the conductor log level and return the conductor root logger.

    Parameters
    - verbose: DEBUG, registration and dispatch decisions included.
    - quiet: ERROR only; ignored when verbose is set.
    """
    root = get_logger(ROOT)
    if verbose:
        root.setLevel(logging.DEBUG)
    elif quiet:
        root.setLevel(logging.ERROR)
    else:
        root.setLevel(logging.INFO)
    return root


__all__ = (
    "get_logger",
    "configure",
)
