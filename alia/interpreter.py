"""
Alia interpreter: walk a command line and apply it to an alias table.

What this module provides
- Interpreter: consumes an ordered token stream, resolves each verb, parses the
  flag clusters that follow it, and applies the verb to the alias table (which
  is mutated in place) or to its collaborators (the shell executor and the help
  printer).
- verb(*spellings): decorator registering an Interpreter method as a verb handler.

Token stream
- tokens are popped from the left of a deque; every consumed token advances the
  1-based argument index, which all argument faults carry.
- the very first token is allowed to be unrecognized (the program path lands there
  when the full argv is forwarded); it is skipped without being counted.

Chaining
- verbs run left to right. The first fault stops the run and earlier mutations
  are kept: there is no rollback.
- a verb invoked with the 'i' flag reports its own fault as an
  IgnoredFaultWarning and lets the chain continue.

Flags
- f on add overwrites an existing alias.
- f on change creates a missing alias.
- f on remove turns a missing alias into a no-op.
- i on any verb ignores the fault raised by that verb.

Storage
- add and change reject names and contents the config file cannot hold
  (see alia.config.storable), so a run never writes a table that fails to load.
"""
import difflib
import logging
from collections import deque

from .config import storable
from .executor import ShellExecutor
from .faults import *
from .flags import FlagSet, is_cluster, parse_flags
from .helper import HelpPrinter
from .profiles import detect
from .utils import Unset

logger = logging.getLogger(__name__)

_verbs = {}


def verb(*spellings):
    """
    register the decorated method under every given spelling (case-sensitive).

    errors
    - ValueError if a spelling is already registered.
    """
    def decorator(handler):
        for spelling in spellings:
            if _verbs.setdefault(spelling, handler) is not handler:
                raise ValueError("verb %r is already registered" % spelling)
        handler.__spellings__ = spellings
        return handler
    return decorator


class Interpreter:
    """
    Stateful command-line interpreter bound to one alias table.

    Parameters
    - table: dict[str, str], mutated in place.
    - executor: callable receiving the shell arguments of an executed alias
      (defaults to a ShellExecutor for the profile).
    - helper: zero-argument callable printing the usage text (defaults to a HelpPrinter).
    - profile: platform Profile (defaults to the detected one).
    - options: fault options forwarded to trigger() when an ignored fault is
      reported (shell, fancy, colorful, prog).
    """

    def __init__(self, table, /, *, executor=None, helper=None, profile=None, **options):
        self.table = table
        self.profile = profile or detect()
        self.executor = executor or ShellExecutor(self.profile)
        self.helper = helper or HelpPrinter()
        self.options = options
        self._tokens = deque()
        self._index = 0

    @property
    def index(self):
        return self._index

    def run(self, tokens, /):
        """
        interpret a token stream against the table.

        errors
        - NoArgsError: the stream is empty.
        - NoValidArgsError: the stream is a single unrecognized token.
        - InvalidCommandError(token, index): a token in verb position is not a verb.
        - any ArgumentError raised by a verb handler.
        """
        self._tokens = deque(tokens)
        self._index = 0

        if not self._tokens:
            raise NoArgsError()

        token = self._tokens.popleft()
        if (handler := _verbs.get(token)) is not None:
            self._index += 1
            self._dispatch(handler, token)
        elif not self._tokens:
            raise NoValidArgsError()
        else:
            logger.debug("skipping leading token %r", token)

        while self._tokens:
            token = self._pop()
            try:
                handler = _verbs[token]
            except KeyError:
                suggestions = difflib.get_close_matches(token, _verbs.keys(), 3)
                options = {}
                if suggestions:
                    options["hint"] = "did you mean %r? run 'alia help' to see available commands" % suggestions[0]
                raise InvalidCommandError(token, self._index, suggestions=suggestions, **options) from None
            self._dispatch(handler, token)

    def _pop(self):
        """consume the next token, or return Unset when the stream is exhausted."""
        if not self._tokens:
            return Unset
        self._index += 1
        return self._tokens.popleft()

    def _flags(self):
        """consume every flag cluster directly ahead and merge them into one FlagSet."""
        flags = FlagSet()
        while self._tokens and is_cluster(self._tokens[0]):
            parse_flags(self._pop(), self._index, flags)
        return flags

    def _dispatch(self, handler, token):
        flags = self._flags()
        logger.debug("running %r (%s) with %r", token, handler.__name__, flags)
        try:
            handler(self, flags)
        except ArgumentError as fault:
            if not flags.ignore_errors:
                raise
            logger.info("ignoring %s", fault.message)
            trigger(IgnoredFaultWarning(fault), **self.options)

    def _name(self):
        if (name := self._pop()) is Unset:
            raise MissingNameArgumentError(self._index)
        return name

    def _content(self):
        if (content := self._pop()) is Unset:
            raise MissingContentArgumentError(self._index)
        return content

    def _definition(self):
        """consume a name and a content; returns (name, index of the name, content)."""
        name = self._name()
        index = self._index
        content = self._content()
        for text, position in ((name, index), (content, self._index)):
            if not storable(text):
                raise UnstorableTextError(text, position)
        return name, index, content

    @verb("add", "a")
    def add(self, flags):
        """
        define a new alias, or overwrite an existing one with f.

        both arguments are consumed before the existence check, so a missing
        content is reported even when the name already exists, and an ignored
        fault never leaves the content behind in verb position.
        """
        name, index, content = self._definition()
        if name in self.table and not flags.force:
            raise AliasAlreadyExistsError(name, index)
        self.table[name] = content

    @verb("remove", "r")
    def remove(self, flags):
        name = self._name()
        try:
            del self.table[name]
        except KeyError:
            if not flags.force:
                raise CannotRemoveNonExistentValueError(name, self._index) from None

    @verb("change", "c")
    def change(self, flags):
        name, index, content = self._definition()
        if name not in self.table and not flags.force:
            raise AliasDoesNotExistError(name, index)
        self.table[name] = content

    @verb("execute", "e")
    def execute(self, flags):
        name = self._name()
        try:
            content = self.table[name]
        except KeyError:
            raise InvalidAliasNameError(name, self._index) from None
        try:
            self.executor([self.profile.flag, *content.split()])
        except OSError as error:
            raise FailedExecuteError(str(error), self._index) from error

    @verb("help", "h")
    def help(self, flags):
        self.helper()


def interpret(tokens, table, /, **options):
    """shortcut for Interpreter(table, **options).run(tokens); returns the table."""
    Interpreter(table, **options).run(tokens)
    return table


__all__ = (
    "Interpreter",
    "interpret",
    "verb",
)
