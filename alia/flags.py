"""
Flag clusters.

A flag cluster is a single token starting with '-' that packs single-character
switches for the command it follows (for example "-if"). Unknown characters are
ignored; each switch may be set at most once per command, across all the
clusters that follow it.
"""
from .faults import FlagAlreadySetError

# character -> (attribute, user-facing name)
SWITCHES = {
    "i": ("ignore_errors", "ignore errors"),
    "f": ("force", "force"),
}


class FlagSet:
    """switches scoped to one command invocation (never persisted)."""
    __slots__ = ("force", "ignore_errors")

    def __init__(self, force=False, ignore_errors=False):
        self.force = force
        self.ignore_errors = ignore_errors

    def __eq__(self, other):
        if not isinstance(other, FlagSet):
            return NotImplemented
        return (self.force, self.ignore_errors) == (other.force, other.ignore_errors)

    def __repr__(self):
        return "FlagSet(force=%r, ignore_errors=%r)" % (self.force, self.ignore_errors)


def is_cluster(token):
    return isinstance(token, str) and token.startswith("-")


def parse_flags(token, index, /, flags=None):
    """
    parse one flag cluster into a FlagSet.

    parameters
    - token: the cluster, including its leading '-'.
    - index: 1-based argument position of the token (used in faults).
    - flags: a FlagSet to accumulate into (a fresh one when omitted).

    errors
    - FlagAlreadySetError(name, index): a switch was already set for this command.
    """
    if not is_cluster(token):
        raise ValueError("flag cluster must start with '-', got %r" % token)
    flags = flags if flags is not None else FlagSet()
    for char in token[1:]:
        try:
            attribute, name = SWITCHES[char]
        except KeyError:
            continue
        if getattr(flags, attribute):
            raise FlagAlreadySetError(name, index)
        setattr(flags, attribute, True)
    return flags


__all__ = (
    "SWITCHES",
    "FlagSet",
    "is_cluster",
    "parse_flags",
)
