"""
Faults module behavioral tests (codes, rendering, triggering).

Scope
- Validate fault codes and host overrides.
- Validate compact and fancy rendering through rich.
- Validate trigger() in shell and non-shell modes for errors, warnings and exits.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argtable import FaultCode, trigger
from argtable.faults import (
    ArgumentsException,
    ArgumentsExit,
    ArgumentsWarning,
    MissingValueError,
    RequiredArgumentError,
    UnrecognisedArgumentWarning,
)


def _fault(cls=MissingValueError, **options):
    return cls(
        "missing value for '-i' at first position",
        code=FaultCode.MISSING_VALUE,
        title="missing value",
        hint="give '-i' a integer value",
        **options,
    )


class TestFaultCodes(TestCase):
    """Behavioral tests for FaultCode."""

    def testCodesAreStable(self):
        self.assertEqual(FaultCode.INVALID_CHARACTER, 10101)
        self.assertEqual(FaultCode.MISSING_VALUE, 11101)
        self.assertEqual(FaultCode.REQUIRED_ARGUMENT, 11102)
        self.assertEqual(FaultCode.UNRECOGNISED_ARGUMENT, 20101)
        self.assertEqual(FaultCode.INVALID_VALUE, 20102)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "11101")

    def testNormalizeHonorsHostLabels(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.MISSING_VALUE: "E-MISSING"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-MISSING")


class TestRendering(TestCase):
    """Behavioral tests for the rich rendering of faults."""

    def setUp(self):
        self.console = Console(color_system=None, force_terminal=False, width=200)

    def render(self, fault):
        with self.console.capture() as capture:
            self.console.print(fault)
        return capture.get()

    def testCompactLine(self):
        output = self.render(_fault(prog="tool"))
        self.assertEqual(output.strip(), "[ tool — 11101 | Missing Value ] missing value for '-i' at first position")

    def testDefaultProgram(self):
        self.assertIn("[ argtable — 11101", self.render(_fault()))

    def testFancyPanelShowsHint(self):
        output = self.render(_fault(prog="tool", fancy=True))
        self.assertIn("Missing Value", output)
        self.assertIn("→ give '-i' a integer value", output)

    def testWarningRendering(self):
        warning = UnrecognisedArgumentWarning(
            "unrecognised argument '-x' at first position",
            code=FaultCode.UNRECOGNISED_ARGUMENT,
            title="unrecognised argument",
            colorful=False,
        )
        self.assertIn("| Unrecognised Argument ]", self.render(warning))

    def testExitRendersEveryException(self):
        exit = ArgumentsExit([
            _fault(),
            RequiredArgumentError("required argument '-n' not supplied", code=FaultCode.REQUIRED_ARGUMENT, title="required argument"),
        ])
        output = self.render(exit)
        self.assertIn("missing value for '-i'", output)
        self.assertIn("required argument '-n' not supplied", output)

    def testStrIsTheMessage(self):
        self.assertEqual(str(_fault()), "missing value for '-i' at first position")
        self.assertEqual(str(MissingValueError()), "")


class TestTrigger(TestCase):
    """Behavioral tests for trigger() and the fault hooks."""

    def setUp(self):
        self.console = Console(color_system=None, force_terminal=False, width=200)
        patcher = mock.patch("argtable.faults.console", self.console)
        patcher.start()
        self.addCleanup(patcher.stop)

    def testExceptionRaisedOutsideShell(self):
        with self.assertRaises(MissingValueError):
            trigger(_fault())

    def testExceptionPrintedInShell(self):
        with self.console.capture() as capture:
            trigger(_fault(), shell=True)
        self.assertIn("missing value for '-i'", capture.get())

    def testWarningWarnsOutsideShell(self):
        with self.assertWarns(UnrecognisedArgumentWarning) as context:
            trigger(_fault(UnrecognisedArgumentWarning))
        self.assertEqual(context.filename, __file__)

    def testWarningPrintedInShell(self):
        with self.console.capture() as capture:
            trigger(_fault(UnrecognisedArgumentWarning), shell=True)
        self.assertIn("missing value for '-i'", capture.get())

    def testExitRaisesOutsideShell(self):
        with self.assertRaises(ArgumentsExit) as context:
            trigger(ArgumentsExit([_fault()]))
        self.assertIsInstance(context.exception.exceptions[0], MissingValueError)

    def testExitLeavesInShell(self):
        with self.console.capture() as capture, self.assertRaises(SystemExit) as context:
            trigger(ArgumentsExit([_fault()]), shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("missing value for '-i'", capture.get())

    def testReplaceMergesOptions(self):
        fault = copy.replace(_fault(prog="tool"), shell=True)
        self.assertEqual(fault.options["prog"], "tool")
        self.assertTrue(fault.options["shell"])
        self.assertEqual(fault.message, "missing value for '-i' at first position")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            _fault().options["shell"] = True  # type: ignore[index]

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testHierarchy(self):
        self.assertTrue(issubclass(MissingValueError, ArgumentsException))
        self.assertTrue(issubclass(UnrecognisedArgumentWarning, ArgumentsWarning))
        self.assertTrue(issubclass(UnrecognisedArgumentWarning, Warning))


if __name__ == "__main__":
    unittest.main()
