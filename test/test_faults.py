"""
Fault tests (taxonomy, rendering, trigger, cause-chain formatting).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase

from rich.console import Console

from switchboard import (
    Switchboard,
    ArgumentsException,
    DefinitionConflict,
    ParseError,
    ValidationError,
    DuplicatedNameError,
    SwitchCollisionError,
    UnrecognizedTokenError,
    UnconvertibleValueError,
    MissingMandatoryError,
    FaultCode,
    suppress_stack,
    format_details,
    trigger,
    getdoc,
)


def chained():
    try:
        try:
            raise ValueError("inner")
        except ValueError as exception:
            raise RuntimeError("outer\nsecond line") from exception
    except RuntimeError as exception:
        return exception


class TestTaxonomy(TestCase):

    def testFamilies(self):
        self.assertTrue(issubclass(DuplicatedNameError, DefinitionConflict))
        self.assertTrue(issubclass(UnconvertibleValueError, ParseError))
        self.assertTrue(issubclass(MissingMandatoryError, ValidationError))
        for family in (DefinitionConflict, ParseError, ValidationError):
            self.assertTrue(issubclass(family, ArgumentsException))

    def testOptionsAreReadOnly(self):
        fault = UnrecognizedTokenError("boom", token="x")
        with self.assertRaises(TypeError):
            fault.options["token"] = "y"  # type: ignore[index]

    def testUserInputDefaultsToFalse(self):
        self.assertFalse(UnrecognizedTokenError("boom").user_input)

    def testCodeNormalize(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "22002")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_VALUE))
        with self.assertRaises(TypeError):
            getdoc(22002)


class TestRendering(TestCase):

    def testHeaderAndHint(self):
        fault = UnrecognizedTokenError(
            "unrecognized switch or unpaired value 'x' at position 1",
            code=FaultCode.UNRECOGNIZED_TOKEN,
            title="unrecognized token",
            hint="use /? to see the legal command-line arguments",
            prog="demo",
        )
        buffer = io.StringIO()
        Console(file=buffer, width=200).print(fault)
        output = buffer.getvalue()
        self.assertIn("[ demo — 22001 | Unrecognized Token ]", output)
        self.assertIn("unrecognized switch or unpaired value 'x' at position 1", output)
        self.assertIn("→ use /? to see the legal command-line arguments", output)


class TestTrigger(TestCase):

    def testReraisesMergedCopy(self):
        fault = UnrecognizedTokenError("boom", code=FaultCode.UNRECOGNIZED_TOKEN)
        with self.assertRaises(UnrecognizedTokenError) as context:
            trigger(fault, prog="demo")
        self.assertIsNot(context.exception, fault)
        self.assertEqual(context.exception.options["prog"], "demo")
        self.assertIs(context.exception.code, FaultCode.UNRECOGNIZED_TOKEN)

    def testReplaceKeepsCauseAndMarker(self):
        fault = UnconvertibleValueError("boom")
        fault.__cause__ = ValueError("bad")
        suppress_stack(fault)
        clone = fault.__replace__(prog="demo")
        self.assertIs(clone.__cause__, fault.__cause__)
        self.assertTrue(clone.__suppress_stack__)

    def testShellExits(self):
        fault = UnrecognizedTokenError("boom", code=FaultCode.UNRECOGNIZED_TOKEN, prog="demo")
        buffer = io.StringIO()
        with contextlib.redirect_stderr(buffer), self.assertRaises(SystemExit) as context:
            trigger(fault, shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("boom", buffer.getvalue())
        self.assertIn("data[prog]", buffer.getvalue())

    def testRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("boom"))


class TestFormatDetails(TestCase):

    def testCauseChain(self):
        text = format_details(chained())
        self.assertIn("[builtins.RuntimeError] - outer\n", text)
        self.assertIn("   second line\n", text)
        self.assertIn("   [builtins.ValueError] - inner\n", text)
        self.assertIn("      @ ", text)
        self.assertIn('File "', text)

    def testContextPrefix(self):
        self.assertTrue(format_details(chained(), "failed:\n").startswith("failed:\n[builtins.RuntimeError]"))

    def testSuppressedStack(self):
        with self.assertRaises(MissingMandatoryError) as context:
            Switchboard().add_int("Count", "lines", "c", mandatory=True).parse([])
        text = format_details(context.exception)
        self.assertIn("data[user_input]\t= True", text)
        self.assertIn("data[suppress-stack]\t= True", text)
        self.assertNotIn('File "', text)

    def testSuppressedCauseHidesStack(self):
        try:
            try:
                raise suppress_stack(ValueError("inner"))
            except ValueError as exception:
                raise RuntimeError("outer") from exception
        except RuntimeError as exception:
            text = format_details(exception)
        self.assertNotIn('File "', text)

    def testCollisionOptionsListed(self):
        board = Switchboard().add_bool("Verbose", "chatty", "v")
        with self.assertRaises(SwitchCollisionError) as context:
            board.add_bool("Vivid", "colors", "V")
        self.assertIn("data[switch]\t= V", format_details(context.exception))

    def testRejectsNonExceptions(self):
        with self.assertRaises(TypeError):
            format_details("boom")
        with self.assertRaises(TypeError):
            suppress_stack("boom")


if __name__ == "__main__":
    unittest.main()
