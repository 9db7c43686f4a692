"""
Flag cluster behavioral tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from alia.faults import FlagAlreadySetError
from alia.flags import FlagSet, is_cluster, parse_flags


class TestParseFlags(TestCase):
    """Behavioral tests for parse_flags()."""

    def testDefaults(self):
        self.assertEqual(FlagSet(), FlagSet(force=False, ignore_errors=False))

    def testSingleSwitches(self):
        self.assertEqual(parse_flags("-i", 2), FlagSet(ignore_errors=True))
        self.assertEqual(parse_flags("-f", 2), FlagSet(force=True))

    def testCluster(self):
        self.assertEqual(parse_flags("-if", 2), FlagSet(force=True, ignore_errors=True))

    def testUnknownCharactersAreIgnored(self):
        self.assertEqual(parse_flags("-xyz", 2), FlagSet())
        self.assertEqual(parse_flags("-", 2), FlagSet())

    def testRepeatedSwitchInCluster(self):
        with self.assertRaises(FlagAlreadySetError) as context:
            parse_flags("-ii", 3)
        self.assertEqual(context.exception.flag, "ignore errors")
        self.assertEqual(context.exception.index, 3)

    def testRepeatedSwitchAcrossClusters(self):
        flags = parse_flags("-f", 2)
        with self.assertRaises(FlagAlreadySetError) as context:
            parse_flags("-if", 3, flags)
        self.assertEqual(context.exception.flag, "force")
        self.assertEqual(context.exception.index, 3)

    def testAccumulates(self):
        flags = parse_flags("-f", 2)
        self.assertIs(parse_flags("-i", 3, flags), flags)
        self.assertEqual(flags, FlagSet(force=True, ignore_errors=True))

    def testRejectsNonClusters(self):
        self.assertFalse(is_cluster("add"))
        with self.assertRaises(ValueError):
            parse_flags("add", 1)


if __name__ == "__main__":
    unittest.main()
