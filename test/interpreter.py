"""
Interpreter behavioral tests (verbs, chaining, flags, faults).

Scope
- Validate each verb against an in-memory table.
- Validate argument positions carried by faults.
- Validate chaining without rollback, and the force / ignore-errors flags.
- Validate that texts the config file cannot hold are rejected.
- Validate shell requests through a recording executor.

Conventions
- Test method names follow CamelCase per project convention.
- Collaborators are replaced by small recording fakes; nothing is spawned.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from alia.faults import (
    MissingNameArgumentError,
    MissingContentArgumentError,
    FailedExecuteError,
    CannotRemoveNonExistentValueError,
    InvalidAliasNameError,
    AliasDoesNotExistError,
    AliasAlreadyExistsError,
    InvalidCommandError,
    NoValidArgsError,
    NoArgsError,
    FlagAlreadySetError,
    UnstorableTextError,
    IgnoredFaultWarning,
)
from alia.interpreter import Interpreter, interpret, verb
from alia.profiles import POSIX, WINDOWS


class RecordingExecutor:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def __call__(self, arguments, /):
        self.calls.append(list(arguments))
        if self.error:
            raise self.error


class RecordingHelper:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


class InterpreterTestCase(TestCase):
    def setUp(self):
        self.executor = RecordingExecutor()
        self.helper = RecordingHelper()

    def run_tokens(self, tokens, table=None, profile=POSIX):
        table = {} if table is None else table
        interpret(tokens, table, executor=self.executor, helper=self.helper, profile=profile)
        return table

    def assertFault(self, fault, tokens, table=None, **attributes):
        table = {} if table is None else table
        with self.assertRaises(fault) as context:
            self.run_tokens(tokens, table)
        for name, value in attributes.items():
            self.assertEqual(getattr(context.exception, name), value, name)
        return table


class TestStream(InterpreterTestCase):
    """Behavioral tests for the token loop."""

    def testNoArgs(self):
        self.assertFault(NoArgsError, [])

    def testSingleUnknownToken(self):
        self.assertFault(NoValidArgsError, [""])
        self.assertFault(NoValidArgsError, ["/usr/bin/alia"])

    def testLeadingUnknownTokenIsSkippedAndNotCounted(self):
        table = self.run_tokens(["/usr/bin/alia", "add", "x", "echo x"])
        self.assertEqual(table, {"x": "echo x"})
        self.assertFault(AliasDoesNotExistError, ["/usr/bin/alia", "c", "y", "echo y"], name="y", index=2)

    def testUnknownCommandLaterInStream(self):
        table = self.assertFault(
            InvalidCommandError, ["a", "x", "echo x", "ad", "y", "echo y"], name="ad", index=4
        )
        self.assertEqual(table, {"x": "echo x"})

    def testUnknownCommandSuggestsCloseMatch(self):
        with self.assertRaises(InvalidCommandError) as context:
            self.run_tokens(["help", "ad"])
        self.assertIn("add", context.exception.options["suggestions"])

    def testVerbsAreCaseSensitive(self):
        self.assertFault(InvalidCommandError, ["help", "ADD"], name="ADD", index=2)

    def testHelpFirstThenAdd(self):
        table = self.run_tokens(["h", "add", "my_alias", "echo test"])
        self.assertEqual(table, {"my_alias": "echo test"})
        self.assertEqual(self.helper.calls, 1)

    def testIndexIsExposed(self):
        interpreter = Interpreter({}, executor=self.executor, helper=self.helper, profile=POSIX)
        interpreter.run(["a", "x", "echo x", "r", "x"])
        self.assertEqual(interpreter.index, 5)

    def testVerbRegistrationKeepsTheHandler(self):
        self.assertEqual(Interpreter.add.__name__, "add")
        self.assertEqual(Interpreter.add.__spellings__, ("add", "a"))

    def testDuplicateVerbRegistrationIsRejected(self):
        with self.assertRaises(ValueError):
            @verb("add")
            def other(interpreter, flags):
                pass


class TestVerbs(InterpreterTestCase):
    """Behavioral tests for each verb."""

    def testAdd(self):
        self.assertEqual(self.run_tokens(["a", "my_alias", "echo test"]), {"my_alias": "echo test"})

    def testAddLongSpelling(self):
        self.assertEqual(self.run_tokens(["add", "my_alias", "echo test"]), {"my_alias": "echo test"})

    def testAddExisting(self):
        table = self.assertFault(
            AliasAlreadyExistsError, ["a", "my_alias", "new"], {"my_alias": "old"}, name="my_alias", index=2
        )
        self.assertEqual(table, {"my_alias": "old"})

    def testAddMissingName(self):
        self.assertFault(MissingNameArgumentError, ["add"], index=1)

    def testAddMissingContent(self):
        table = self.assertFault(MissingContentArgumentError, ["add", "my_alias"], index=2)
        self.assertEqual(table, {})

    def testAddExistingNameWithoutContent(self):
        table = self.assertFault(MissingContentArgumentError, ["a", "x"], {"x": "old"}, index=2)
        self.assertEqual(table, {"x": "old"})

    def testAddThenRemove(self):
        self.assertEqual(self.run_tokens(["a", "my_alias", "echo test", "r", "my_alias"]), {})

    def testRemoveMissing(self):
        self.assertFault(CannotRemoveNonExistentValueError, ["remove", "ghost"], name="ghost", index=2)

    def testRemoveMissingName(self):
        self.assertFault(MissingNameArgumentError, ["r"], index=1)

    def testChange(self):
        table = self.run_tokens(["change", "my_alias", "echo new"], {"my_alias": "echo old"})
        self.assertEqual(table, {"my_alias": "echo new"})

    def testChangeMissing(self):
        table = self.assertFault(AliasDoesNotExistError, ["c", "my_alias", "echo test"], name="my_alias", index=2)
        self.assertEqual(table, {})

    def testChangeMissingContent(self):
        self.assertFault(MissingContentArgumentError, ["c", "my_alias"], {"my_alias": "x"}, index=2)

    def testExecuteMissing(self):
        self.assertFault(InvalidAliasNameError, ["e", "my_alias"], name="my_alias", index=2)
        self.assertEqual(self.executor.calls, [])

    def testExecuteMissingName(self):
        self.assertFault(MissingNameArgumentError, ["execute"], index=1)

    def testExecuteSplitsOnWhitespaceRuns(self):
        table = self.run_tokens(["a", "my_alias", "echo   test\tnow", "e", "my_alias"])
        self.assertEqual(table, {"my_alias": "echo   test\tnow"})
        self.assertEqual(self.executor.calls, [["-c", "echo", "test", "now"]])

    def testExecuteUsesProfileFlag(self):
        self.run_tokens(["e", "dir"], {"dir": "dir /b"}, profile=WINDOWS)
        self.assertEqual(self.executor.calls, [["/C", "dir", "/b"]])

    def testExecuteSpawnFailure(self):
        self.executor.error = FileNotFoundError(2, "No such file or directory")
        self.assertFault(FailedExecuteError, ["e", "x"], {"x": "echo x"}, index=2)

    def testAddRejectsBackslashBeforeQuote(self):
        table = self.assertFault(UnstorableTextError, ["a", "greet", r'echo \"hi\"'], text=r'echo \"hi\"', index=3)
        self.assertEqual(table, {})

    def testAddRejectsTrailingBackslashInName(self):
        self.assertFault(UnstorableTextError, ["add", "tools\\", "dir"], index=2)

    def testAddRejectsEmptyContent(self):
        self.assertFault(UnstorableTextError, ["a", "x", ""], text="", index=3)

    def testChangeRejectsTrailingBackslash(self):
        table = self.assertFault(UnstorableTextError, ["c", "-f", "dir", "C:\\tools\\"], {"dir": "C:"}, index=4)
        self.assertEqual(table, {"dir": "C:"})

    def testUnstorableTextCanBeIgnored(self):
        with self.assertWarns(IgnoredFaultWarning):
            table = self.run_tokens(["a", "-i", "dir", "C:\\tools\\", "a", "x", "1"])
        self.assertEqual(table, {"x": "1"})

    def testHelp(self):
        table = self.run_tokens(["help"], {"keep": "me"})
        self.assertEqual(table, {"keep": "me"})
        self.assertEqual(self.helper.calls, 1)


class TestChaining(InterpreterTestCase):
    """Behavioral tests for chained commands and flags."""

    def testFailureKeepsEarlierMutations(self):
        table = self.assertFault(
            AliasAlreadyExistsError, ["a", "x", "1", "a", "y", "2", "a", "x", "3"], name="x", index=8
        )
        self.assertEqual(table, {"x": "1", "y": "2"})

    def testFailureStopsTheChain(self):
        table = self.assertFault(CannotRemoveNonExistentValueError, ["r", "ghost", "a", "x", "1"])
        self.assertEqual(table, {})

    def testForceAddOverwrites(self):
        table = self.run_tokens(["a", "-f", "x", "new"], {"x": "old"})
        self.assertEqual(table, {"x": "new"})

    def testForceChangeCreates(self):
        self.assertEqual(self.run_tokens(["c", "-f", "x", "new"]), {"x": "new"})

    def testForceRemoveIgnoresMissing(self):
        self.assertEqual(self.run_tokens(["r", "-f", "ghost", "a", "x", "1"]), {"x": "1"})

    def testFlagTokensAreCounted(self):
        table = self.assertFault(
            AliasDoesNotExistError, ["c", "-f", "-x", "x", "1", "c", "y", "2"], name="y", index=7
        )
        self.assertEqual(table, {"x": "1"})

    def testIgnoreErrorsContinuesTheChain(self):
        with self.assertWarns(IgnoredFaultWarning) as context:
            table = self.run_tokens(["a", "-i", "x", "new", "a", "y", "2"], {"x": "old"})
        self.assertEqual(table, {"x": "old", "y": "2"})
        self.assertIsInstance(context.warning.fault, AliasAlreadyExistsError)
        self.assertEqual(context.warning.fault.index, 3)

    def testIgnoreAndForceCluster(self):
        table = self.run_tokens(["a", "-if", "x", "new"], {"x": "old"})
        self.assertEqual(table, {"x": "new"})

    def testRepeatedFlagIsNotIgnorable(self):
        self.assertFault(FlagAlreadySetError, ["a", "-i", "-fi", "x", "1"], flag="ignore errors", index=3)

    def testFlagsAreScopedToOneCommand(self):
        table = self.assertFault(
            AliasAlreadyExistsError, ["a", "-f", "x", "1", "a", "x", "2"], {"x": "0"}, name="x", index=6
        )
        self.assertEqual(table, {"x": "1"})


if __name__ == "__main__":
    unittest.main()
