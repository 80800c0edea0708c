# python
"""
Faults module behavioral tests (codes, options, rendering, triggering).

Scope
- Validate FaultCode normalization and host overrides (__codes__, __docs__ in __main__).
- Validate ParserException/HelpRequested options, copy.replace, and rich rendering.
- Validate trigger() in shell and non-shell modes.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured with a colorless rich Console writing to a StringIO.
"""

from __future__ import annotations

import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

from argot import create_parser
from argot.faults import (
    FaultCode,
    ParserException,
    DispatchError,
    SpecificationError,
    MissingValueError,
    MalformedNameError,
    NoSuchArgumentError,
    HelpRequested,
    trigger,
    getdoc,
)


def render(renderable):
    console = Console(file=io.StringIO(), color_system=None, width=120)
    console.print(renderable)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testCodesAreGroupedByDomain(self):
        self.assertEqual(FaultCode.MALFORMED_NAME, 21101)
        self.assertEqual(FaultCode.UNKNOWN_ARGUMENT, 21211)
        self.assertEqual(FaultCode.TOO_FEW_ARGUMENTS, 21222)
        self.assertEqual(FaultCode.NO_SUCH_ARGUMENT, 21301)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "21212")

    def testNormalizeHostOverride(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.MISSING_VALUE: "E-MISSING"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-MISSING")
            self.assertEqual(FaultCode.MALFORMED_NAME.normalize(), "21101")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.MALFORMED_FLAG))
        with mock.patch.object(sys.modules["__main__"], "__docs__", {FaultCode.MALFORMED_FLAG: "flags are letters"}, create=True):
            self.assertEqual(getdoc(FaultCode.MALFORMED_FLAG), "flags are letters")
        with self.assertRaises(TypeError):
            getdoc(21102)


class TestParserException(TestCase):
    """Behavioral tests for ParserException and its families."""

    def testHierarchy(self):
        self.assertTrue(issubclass(MissingValueError, DispatchError))
        self.assertTrue(issubclass(MalformedNameError, SpecificationError))
        self.assertTrue(issubclass(MalformedNameError, ValueError))
        self.assertTrue(issubclass(NoSuchArgumentError, KeyError))
        self.assertFalse(issubclass(HelpRequested, ParserException))

    def testMessageAndOptions(self):
        fault = MissingValueError("Missing value for optional argument --opt", token="--opt")
        self.assertEqual(str(fault), "Missing value for optional argument --opt")
        self.assertEqual(fault.options["token"], "--opt")
        with self.assertRaises(TypeError):
            fault.options["token"] = "--other"

    def testKeyErrorKeepsMessage(self):
        self.assertEqual(str(NoSuchArgumentError("No such argument: x.")), "No such argument: x.")

    def testReplaceMergesOptions(self):
        fault = MissingValueError("message", token="--opt")
        replaced = copy.replace(fault, shell=True)
        self.assertIsInstance(replaced, MissingValueError)
        self.assertEqual(replaced.message, "message")
        self.assertEqual(dict(replaced.options), {"token": "--opt", "shell": True})
        self.assertNotIn("shell", fault.options)

    def testRenderPlain(self):
        fault = MissingValueError(
            "Missing value for optional argument --opt",
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint="pass a value after it",
            tool=create_parser("copy"),
        )
        output = render(fault)
        self.assertIn("[ copy — 21212 | Missing Value ]", output)
        self.assertIn("Missing value for optional argument --opt", output)
        self.assertIn("→ pass a value after it", output)

    def testRenderWithoutContext(self):
        output = render(MissingValueError("boom"))
        self.assertIn("[ prog — - | Missing Value Error ]", output)
        self.assertIn("boom", output)

    def testRenderFancy(self):
        fault = MissingValueError("boom", fancy=True)
        self.assertIsInstance(fault.__rich__(), Panel)
        self.assertIn("boom", render(fault))


class TestHelpRequested(TestCase):
    """Behavioral tests for the help outcome."""

    def testTextAndStr(self):
        help = HelpRequested("usage: prog")
        self.assertEqual(help.text, "usage: prog")
        self.assertEqual(str(help), "usage: prog")

    def testRenderUsesFormatter(self):
        parser = create_parser("tool").add_arg("input")
        help = HelpRequested(parser.help, formatter=parser.formatter, tool=parser)
        self.assertEqual(help.__rich__().plain, parser.help)
        self.assertIn("usage: tool [--help|-h] input", render(help))

    def testRenderFancy(self):
        help = HelpRequested("usage: tool", fancy=True)
        self.assertIsInstance(help.__rich__(), Panel)

    def testReplaceKeepsText(self):
        help = copy.replace(HelpRequested("usage: tool"), shell=False)
        self.assertEqual(help.text, "usage: tool")
        self.assertFalse(help.options["shell"])


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(MissingValueError) as cm:
            trigger(MissingValueError("boom"), fancy=True)
        self.assertTrue(cm.exception.options["fancy"])

    def testShellModeExits(self):
        with mock.patch("argot.faults.console", Console(file=io.StringIO(), color_system=None)) as console:
            with self.assertRaises(SystemExit) as cm:
                trigger(MissingValueError("boom"), shell=True)
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("boom", console.file.getvalue())

    def testRejectsObjectsWithoutProtocol(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("boom"))


if __name__ == "__main__":
    unittest.main()
