"""
Alias table codec and persistence.

Format
- a sequence of entries, each `"name" = "value"`, separated by any whitespace.
  encode() writes one entry per line using the profile's line terminator.
- names and values follow the quoted-string grammar of alia.strings.
- decoding later duplicates silently overwrites earlier ones.

What this module provides
- decode(text): text → alias table, raising a ConfigError subclass on failure.
- encode(table, profile): alias table → text.
- storable(text): whether a name or value survives the encode/decode round trip.
- load(path) / dump(table, path, profile): the same against a file on disk.
"""
import logging
from pathlib import Path

from .faults import (
    StringParseError,
    ConfigError,
    ConfigNotFoundError,
    ConfigCouldNotBeCreatedError,
    ConfigCouldNotBeReadError,
    ConfigCouldNotBeWrittenError,
    MissingEqualSignError,
    MissingAliasValueError,
    InvalidAliasError,
    InvalidValueError,
)
from .profiles import detect
from .strings import Cursor, extract
from .utils import Unset

logger = logging.getLogger(__name__)

DEFAULT_PATH = "./cfg.alia"


def decode(text, /):
    """
    decode a persisted alias table.

    behavior
    - outer whitespace is ignored; an empty (or blank) text yields an empty table.
    - entries are counted from 1; every fault carries that entry index and the
      physical line where decoding stopped.

    errors
    - InvalidAliasError(inner, index): the name is not a valid quoted string.
    - MissingAliasValueError(index): the text ends right after a name.
    - MissingEqualSignError(index): the name is not followed by '='.
    - InvalidValueError(inner, index): the value is not a valid quoted string.
    """
    cursor = Cursor(text.strip())
    table = {}
    index = 1
    while cursor:
        try:
            name = extract(cursor)
        except StringParseError as inner:
            raise InvalidAliasError(inner, index, line=cursor.line) from inner

        cursor.skip_whitespace()
        match cursor.pop():
            case "=":
                pass
            case char if char is Unset:
                raise MissingAliasValueError(index, line=cursor.line)
            case _:
                raise MissingEqualSignError(index, line=cursor.line)

        try:
            value = extract(cursor)
        except StringParseError as inner:
            raise InvalidValueError(inner, index, line=cursor.line) from inner

        table[name] = value
        cursor.skip_whitespace()
        index += 1
    return table


def _quote(text):
    return '"%s"' % text.replace('"', '\\"')


def encode(table, /, profile=None):
    """
    encode an alias table, one `"name" = "value"` entry per line.

    quotes inside names and values are escaped so decode() restores them.
    the entry order follows the table's iteration order and carries no meaning.
    """
    newline = (profile or detect()).newline
    return "".join("%s = %s%s" % (_quote(name), _quote(value), newline) for name, value in table.items())


def storable(text, /):
    """
    tell whether `text` survives being written by encode() and read back by decode().

    the format has no escape for backslashes: empty text, a backslash right before
    a quote, and an odd run of trailing backslashes cannot be stored.
    """
    try:
        return decode(encode({text: text})) == {text: text}
    except ConfigError:
        return False


def load(path=DEFAULT_PATH, /):
    """
    read and decode the alias table stored at `path`.

    errors
    - ConfigNotFoundError: the file did not exist; an empty one has been created.
      callers may treat this as recoverable and continue with an empty table.
    - ConfigCouldNotBeCreatedError: the file did not exist and creating it failed.
    - ConfigCouldNotBeReadError: the file is not valid UTF-8.
    - any ConfigError raised by decode().
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as error:
        logger.debug("config %s could not be read (%s), creating it", path, error)
        try:
            path.touch()
        except OSError as error:
            raise ConfigCouldNotBeCreatedError(str(error)) from error
        raise ConfigNotFoundError(path) from None
    except UnicodeDecodeError as error:
        raise ConfigCouldNotBeReadError(str(error)) from error

    table = decode(text)
    logger.debug("loaded %d aliases from %s", len(table), path)
    return table


def dump(table, path=DEFAULT_PATH, /, profile=None):
    """
    encode and write the alias table to `path`, replacing its content.

    errors
    - ConfigCouldNotBeWrittenError: the operating system refused the write.
    """
    path = Path(path)
    try:
        # newline="" keeps the profile's terminator as-is on every platform
        with path.open("w", encoding="utf-8", newline="") as file:
            file.write(encode(table, profile))
    except OSError as error:
        raise ConfigCouldNotBeWrittenError(str(error)) from error
    logger.debug("wrote %d aliases to %s", len(table), path)


__all__ = (
    "DEFAULT_PATH",
    "decode",
    "encode",
    "storable",
    "load",
    "dump",
)
