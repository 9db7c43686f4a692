"""
Platform profiles.

A Profile bundles the platform constants the rest of the package needs:
the line terminator written after each config entry, the shell program used
to execute aliases, and the flag that makes that shell run a command.

The active profile is resolved once at startup (see detect() and
alia.settings) and then passed explicitly to whoever needs it, so tests can
substitute any profile deterministically.
"""
import os
from typing import NamedTuple

from .faults import UnknownProfileError


class Profile(NamedTuple):
    name: str
    newline: str
    shell: str
    flag: str


POSIX = Profile("posix", "\n", "sh", "-c")
WINDOWS = Profile("windows", "\r\n", "cmd", "/C")

PROFILES = {profile.name: profile for profile in (POSIX, WINDOWS)}


def detect(name=None):
    """
    resolve a profile by name, or from the running platform when name is None.

    errors
    - UnknownProfileError when the name does not match a known profile.
    """
    if name is None:
        return WINDOWS if os.name == "nt" else POSIX
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise UnknownProfileError(name, PROFILES) from None


__all__ = (
    "Profile",
    "POSIX",
    "WINDOWS",
    "PROFILES",
    "detect",
)
