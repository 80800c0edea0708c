# python
"""
Utils module behavioral tests (sentinel, helpers, name normalization).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from argot.utils import Unset, UnsetType, coalesce, rename, mirror, camelize


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType): ...

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(Unset))


class TestHelpers(TestCase):
    """Behavioral tests for rename() and mirror()."""

    def testRename(self):
        @rename("h")
        def k(): ...
        self.assertEqual(k.__name__, "h")
        self.assertEqual(k.__qualname__, "h")

        with self.assertRaises(TypeError):
            rename(7)
        with self.assertRaises(TypeError):
            rename("h")(len)

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = ["a"]
                self._table = {"a": 1}

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        self.assertIsInstance(holder.table, MappingProxyType)
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestCamelize(TestCase):
    """Behavioral tests for name normalization."""

    def testRules(self):
        for name, expected in (
            ("--camel-case", "camelCase"),
            ("camel-case", "camelCase"),
            ("input_file", "inputFile"),
            ("-v", "v"),
            ("URI", "uri"),
            ("dry-run-mode", "dryRunMode"),
            ("a--b", "aB"),
            ("camelCase", "camelcase"),
        ):
            with self.subTest(name=name):
                self.assertEqual(camelize(name), expected)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            camelize(7)


if __name__ == "__main__":
    unittest.main()
