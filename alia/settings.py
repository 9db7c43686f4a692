"""
Runtime settings, resolved once at startup from the environment.

Variables
- ALIA_CONFIG:  path of the config file (default: ./cfg.alia).
- ALIA_DEBUG:   enable debug logging (any non-empty value other than "0").
- ALIA_FANCY:   render faults and help inside rich panels.
- ALIA_PROFILE: force a platform profile ("posix" or "windows").
- NO_COLOR:     disable colors (https://no-color.org).
"""
import os
from pathlib import Path
from typing import NamedTuple

from .config import DEFAULT_PATH
from .profiles import Profile, detect


def _enabled(value):
    return bool(value) and value.strip() not in ("0", "false", "no", "off")


class Settings(NamedTuple):
    path: Path
    profile: Profile
    debug: bool = False
    fancy: bool = False
    colorful: bool = True

    @classmethod
    def from_environ(cls, environ=None):
        environ = os.environ if environ is None else environ
        return cls(
            path=Path(environ.get("ALIA_CONFIG") or DEFAULT_PATH),
            profile=detect(environ.get("ALIA_PROFILE") or None),
            debug=_enabled(environ.get("ALIA_DEBUG", "")),
            fancy=_enabled(environ.get("ALIA_FANCY", "")),
            colorful="NO_COLOR" not in environ,
        )


__all__ = ("Settings",)
