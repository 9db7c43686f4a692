"""
Alia faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain (strings, config, arguments, flags, warnings).
- AliaException / AliaWarning: base types that carry a message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- Three closed error taxonomies:
  • StringParseError: a quoted string could not be extracted.
  • ConfigError: the persisted alias table could not be read, decoded or written.
  • ArgumentError: the command line could not be interpreted.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).

UX goals
- Position-first messages: argument faults name the ordinal position of the
  offending token ("from second position"), config faults name the entry.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- Library code raises faults directly; the entry point calls trigger(fault, shell=True, ...)
  so that they are rendered via rich instead of propagating as tracebacks.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import ordinal

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - strings   (1110x): quoted-string extraction
    - config    (1111x): reading, decoding and writing the alias table
    - arguments (1112x/1113x): interpreting the command line
    - flags     (1114x): flag clusters
    - warnings  (121xx): non-fatal notices

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- string errors ---
    STRING_WITHOUT_OPENING_QUOTE    = 11101
    INVALID_STRING                  = 11102
    EMPTY_STRING                    = 11103
    STRING_WITHOUT_CLOSING_QUOTE    = 11104

    # --- config errors ---
    CONFIG_NOT_FOUND                = 11111
    CONFIG_COULD_NOT_BE_CREATED     = 11112
    MISSING_EQUAL_SIGN              = 11113
    MISSING_ALIAS_VALUE             = 11114
    INVALID_ALIAS                   = 11115
    INVALID_VALUE                   = 11116
    CONFIG_COULD_NOT_BE_WRITTEN     = 11117
    CONFIG_COULD_NOT_BE_READ        = 11118
    UNKNOWN_PROFILE                 = 11119

    # --- argument errors ---
    MISSING_NAME_ARGUMENT           = 11121
    MISSING_CONTENT_ARGUMENT        = 11122
    FAILED_EXECUTE                  = 11123
    CANNOT_REMOVE_NON_EXISTENT      = 11124
    INVALID_ALIAS_NAME              = 11125
    ALIAS_DOES_NOT_EXIST            = 11126
    ALIAS_ALREADY_EXISTS            = 11127
    INVALID_COMMAND                 = 11128
    UNSTORABLE_TEXT                 = 11129
    NO_VALID_ARGS                   = 11131
    NO_ARGS                         = 11132

    # --- flag errors ---
    FLAG_ALREADY_SET                = 11141

    # --- warnings ---
    IGNORED_FAULT                   = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, message, styles, title_style, code_style):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body: the message, then a "→ hint" line when a hint is available.
    - fancy: the body is wrapped in a Panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", options.get("prog", "alia")), "prog-name"),
        " — ",
        text(fault.code.normalize(), code_style),
        " | ",
        text(fault.title.title(), title_style),
        " ]"
    )
    body = [text(message, "message")]
    if hint := options.get("hint", fault.hint):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if options.get("fancy", False):
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class AliaException(Exception):
    """
    base type of every alia error.

    class attributes
    - code: FaultCode identifying the fault.
    - title: short lowercased title shown in the header.
    - hint: default actionable hint (may be overridden with the "hint" option).

    options
    - free-form rendering/behavior context merged in by trigger():
      shell, fancy, colorful, deferred, prog, hint.
    """
    code = None
    title = "error"
    hint = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, self.message, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title", "code")

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        console.print(self)
        if self.options.get("deferred"):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        clone = type(self).__new__(type(self), *self.args)
        clone.__dict__.update(self.__dict__)
        clone.options = MappingProxyType({**self.options, **overrides})
        return clone


class StringParseError(AliaException):
    """A quoted string could not be extracted from the input."""


class StringWithoutOpeningQuoteError(StringParseError):
    code = FaultCode.STRING_WITHOUT_OPENING_QUOTE
    title = "missing opening quote"
    hint = "wrap names and values in double quotes (for example: \"name\")"

    def __init__(self, /, **options):
        super().__init__("string does not start with an opening quote", **options)


class InvalidStringError(StringParseError):
    code = FaultCode.INVALID_STRING
    title = "invalid string"
    hint = "complete the string and close it with a double quote"

    def __init__(self, /, **options):
        super().__init__("string consists of an opening quote and nothing else", **options)


class EmptyStringError(StringParseError):
    code = FaultCode.EMPTY_STRING
    title = "empty string"
    hint = "alias names and values must not be empty"

    def __init__(self, /, **options):
        super().__init__("string is empty", **options)


class StringWithoutClosingQuoteError(StringParseError):
    code = FaultCode.STRING_WITHOUT_CLOSING_QUOTE
    title = "missing closing quote"
    hint = "close the string with an unescaped double quote"

    def __init__(self, /, **options):
        super().__init__("string does not end with a closing quote", **options)


class ConfigError(AliaException):
    """The persisted alias table could not be read, decoded or written."""

    def __init__(self, message, index=None, /, **options):
        if (line := options.get("line")) is not None:
            message = "%s (line %d)" % (message, line)
        super().__init__(message, **options)
        self.index = index
        self.line = line


class ConfigNotFoundError(ConfigError):
    code = FaultCode.CONFIG_NOT_FOUND
    title = "config not found"
    hint = "a new, empty config file has been created"

    def __init__(self, path, /, **options):
        super().__init__("config file %r could not be found" % str(path), **options)
        self.path = path


class ConfigCouldNotBeCreatedError(ConfigError):
    code = FaultCode.CONFIG_COULD_NOT_BE_CREATED
    title = "config could not be created"
    hint = "check that the config directory exists and is writable (see ALIA_CONFIG)"

    def __init__(self, detail, /, **options):
        super().__init__(
            "config file could not be found and creating a new one failed: %s" % detail, **options
        )
        self.detail = detail


class ConfigCouldNotBeWrittenError(ConfigError):
    code = FaultCode.CONFIG_COULD_NOT_BE_WRITTEN
    title = "config could not be written"
    hint = "your changes may not have been saved; check the config file permissions"

    def __init__(self, detail, /, **options):
        super().__init__("config file could not be written: %s" % detail, **options)
        self.detail = detail


class ConfigCouldNotBeReadError(ConfigError):
    code = FaultCode.CONFIG_COULD_NOT_BE_READ
    title = "config could not be read"
    hint = "the config file must be UTF-8 text; fix or remove it (see ALIA_CONFIG)"

    def __init__(self, detail, /, **options):
        super().__init__("config file could not be read: %s" % detail, **options)
        self.detail = detail


class UnknownProfileError(ConfigError):
    code = FaultCode.UNKNOWN_PROFILE
    title = "unknown profile"

    def __init__(self, name, choices, /, **options):
        super().__init__("unknown profile %r" % name, **options)
        self.name = name
        self.choices = tuple(choices)
        self.hint = "set ALIA_PROFILE to one of: %s" % ", ".join(self.choices)


class MissingEqualSignError(ConfigError):
    code = FaultCode.MISSING_EQUAL_SIGN
    title = "missing equal sign"
    hint = "separate name and value with '=' (for example: \"name\" = \"value\")"

    def __init__(self, index, /, **options):
        super().__init__("expected an equal sign after the name of the %s alias" % ordinal(index), index, **options)


class MissingAliasValueError(ConfigError):
    code = FaultCode.MISSING_ALIAS_VALUE
    title = "missing alias value"
    hint = "add a value after the name (for example: \"name\" = \"value\")"

    def __init__(self, index, /, **options):
        super().__init__("the %s alias has no value" % ordinal(index), index, **options)


class InvalidAliasError(ConfigError):
    code = FaultCode.INVALID_ALIAS
    title = "invalid alias name"

    def __init__(self, inner, index, /, **options):
        super().__init__(
            "the name of the %s alias could not be parsed: %s" % (ordinal(index), inner.message), index, **options
        )
        self.inner = inner
        self.hint = inner.hint


class InvalidValueError(ConfigError):
    code = FaultCode.INVALID_VALUE
    title = "invalid alias value"

    def __init__(self, inner, index, /, **options):
        super().__init__(
            "the value of the %s alias could not be parsed: %s" % (ordinal(index), inner.message), index, **options
        )
        self.inner = inner
        self.hint = inner.hint


class ArgumentError(AliaException):
    """The command line could not be interpreted."""

    def __init__(self, message, index=None, /, **options):
        super().__init__(message, **options)
        self.index = index


class MissingNameArgumentError(ArgumentError):
    code = FaultCode.MISSING_NAME_ARGUMENT
    title = "missing alias name"
    hint = "pass the name of the alias after the command (for example: alia remove my_alias)"

    def __init__(self, index, /, **options):
        super().__init__("command at %s position requires an alias name" % ordinal(index), index, **options)


class MissingContentArgumentError(ArgumentError):
    code = FaultCode.MISSING_CONTENT_ARGUMENT
    title = "missing alias content"
    hint = "pass the content after the name (for example: alia add my_alias \"echo test\")"

    def __init__(self, index, /, **options):
        super().__init__("alias name at %s position requires a content" % ordinal(index), index, **options)


class FailedExecuteError(ArgumentError):
    code = FaultCode.FAILED_EXECUTE
    title = "execution failed"
    hint = "check that the shell is available on this system"

    def __init__(self, detail, index, /, **options):
        super().__init__(
            "alias from %s position could not be executed: %s" % (ordinal(index), detail), index, **options
        )
        self.detail = detail


class CannotRemoveNonExistentValueError(ArgumentError):
    code = FaultCode.CANNOT_REMOVE_NON_EXISTENT
    title = "cannot remove alias"
    hint = "use -f to ignore aliases that do not exist"

    def __init__(self, name, index, /, **options):
        super().__init__(
            "cannot remove alias %r from %s position because it does not exist" % (name, ordinal(index)),
            index, **options
        )
        self.name = name


class InvalidAliasNameError(ArgumentError):
    code = FaultCode.INVALID_ALIAS_NAME
    title = "unknown alias"
    hint = "add the alias first (for example: alia add my_alias \"echo test\")"

    def __init__(self, name, index, /, **options):
        super().__init__(
            "cannot execute alias %r from %s position because it has no content" % (name, ordinal(index)),
            index, **options
        )
        self.name = name


class AliasDoesNotExistError(ArgumentError):
    code = FaultCode.ALIAS_DOES_NOT_EXIST
    title = "unknown alias"
    hint = "use -f to create the alias when it does not exist"

    def __init__(self, name, index, /, **options):
        super().__init__(
            "cannot change alias %r from %s position because it does not exist" % (name, ordinal(index)),
            index, **options
        )
        self.name = name


class AliasAlreadyExistsError(ArgumentError):
    code = FaultCode.ALIAS_ALREADY_EXISTS
    title = "alias already exists"
    hint = "use -f to overwrite it or 'change' to update it"

    def __init__(self, name, index, /, **options):
        super().__init__(
            "cannot add alias %r from %s position because it already exists" % (name, ordinal(index)),
            index, **options
        )
        self.name = name


class InvalidCommandError(ArgumentError):
    code = FaultCode.INVALID_COMMAND
    title = "unknown command"
    hint = "run 'alia help' to see available commands"

    def __init__(self, name, index, /, **options):
        super().__init__("unknown command %r at %s position" % (name, ordinal(index)), index, **options)
        self.name = name


class UnstorableTextError(ArgumentError):
    code = FaultCode.UNSTORABLE_TEXT
    title = "text cannot be stored"
    hint = "the config file cannot hold empty text, a backslash right before a quote, or a trailing backslash"

    def __init__(self, text, index, /, **options):
        super().__init__(
            "argument %r from %s position cannot be stored in the config file" % (text, ordinal(index)),
            index, **options
        )
        self.text = text


class NoValidArgsError(ArgumentError):
    code = FaultCode.NO_VALID_ARGS
    title = "no valid arguments"
    hint = "run 'alia help' to see available commands"

    def __init__(self, /, **options):
        super().__init__("no valid arguments were passed", **options)


class NoArgsError(ArgumentError):
    code = FaultCode.NO_ARGS
    title = "no arguments"
    hint = "run 'alia help' to see available commands"

    def __init__(self, /, **options):
        super().__init__("no arguments were passed", **options)


class FlagAlreadySetError(ArgumentError):
    code = FaultCode.FLAG_ALREADY_SET
    title = "duplicated flag"
    hint = "pass each flag at most once per command"

    def __init__(self, flag, index, /, **options):
        super().__init__(
            "flag %r at %s position was already provided" % (flag, ordinal(index)), index, **options
        )
        self.flag = flag


class AliaWarning(Warning):
    """
    base type of every alia warning.

    warnings never stop a run: outside shell mode they go through warnings.warn,
    in shell mode they are printed to stderr.
    """
    code = None
    title = "warning"
    hint = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, self.message, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title", "code")

    def __trigger__(self):
        if not self.options.get("shell"):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        clone = type(self).__new__(type(self), *self.args)
        clone.__dict__.update(self.__dict__)
        clone.options = MappingProxyType({**self.options, **overrides})
        return clone


class IgnoredFaultWarning(AliaWarning):
    code = FaultCode.IGNORED_FAULT
    title = "ignored error"
    hint = "remove -i to stop at this error"

    def __init__(self, fault, /, **options):
        super().__init__("ignored: %s" % fault.message, **options)
        self.fault = fault


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings machinery.

    typical options
    - shell, fancy, colorful, deferred, prog, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "AliaException",
    "StringParseError",
    "StringWithoutOpeningQuoteError",
    "InvalidStringError",
    "EmptyStringError",
    "StringWithoutClosingQuoteError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigCouldNotBeCreatedError",
    "ConfigCouldNotBeWrittenError",
    "ConfigCouldNotBeReadError",
    "UnknownProfileError",
    "MissingEqualSignError",
    "MissingAliasValueError",
    "InvalidAliasError",
    "InvalidValueError",
    "ArgumentError",
    "MissingNameArgumentError",
    "MissingContentArgumentError",
    "FailedExecuteError",
    "CannotRemoveNonExistentValueError",
    "InvalidAliasNameError",
    "AliasDoesNotExistError",
    "AliasAlreadyExistsError",
    "InvalidCommandError",
    "UnstorableTextError",
    "NoValidArgsError",
    "NoArgsError",
    "FlagAlreadySetError",
    "AliaWarning",
    "IgnoredFaultWarning",
    "trigger",
)
