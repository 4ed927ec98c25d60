# python
"""
Faults behavioral tests.

Scope
- Validate the fault taxonomy (status per family) and rich rendering.
- Validate trigger()/copy.replace option merging.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from githop.faults import (
    CheckedError,
    EditorError,
    EmptyArgumentsError,
    EmptyTitleError,
    ExecutionError,
    FaultCode,
    HostingError,
    MissingArgumentError,
    RepositoryError,
    TooManyArgumentsError,
    UsageError,
    report,
    trigger,
)
from githop.usage import console


class TestFaults(TestCase):
    """Behavioral tests for the fault hierarchy."""

    def testUsageFamilyMapsToTwo(self):
        for fault in (EmptyArgumentsError, MissingArgumentError, TooManyArgumentsError):
            with self.subTest(fault=fault.__name__):
                self.assertTrue(issubclass(fault, UsageError))
                self.assertEqual(fault.status, 2)

    def testCheckedFamilyMapsToOne(self):
        for fault in (ExecutionError, RepositoryError, HostingError, EditorError, EmptyTitleError):
            with self.subTest(fault=fault.__name__):
                self.assertTrue(issubclass(fault, CheckedError))
                self.assertEqual(fault.status, 1)

    def testStrIsTheMessage(self):
        self.assertEqual(str(MissingArgumentError("Missing argument TAG")), "Missing argument TAG")
        self.assertEqual(str(MissingArgumentError()), "missing argument")

    def testTriggerMergesOptions(self):
        with self.assertRaises(HostingError) as caught:
            trigger(HostingError("boom", hint="first"), hint="second", tag="v1.0")
        self.assertEqual(caught.exception.options["hint"], "second")
        self.assertEqual(caught.exception.options["tag"], "v1.0")

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))

    def testReplaceKeepsMessage(self):
        fault = copy.replace(EmptyTitleError("Aborting"), hint="write a title")
        self.assertIsInstance(fault, EmptyTitleError)
        self.assertEqual(fault.message, "Aborting")

    def testReportRendering(self):
        out = console(file=io.StringIO(), colorful=False)
        report(MissingArgumentError("Missing argument TAG", hint="usage: githop release show <TAG>"), out)
        self.assertEqual(out.file.getvalue(), (
            "[ githop — %d | Missing Argument ]\n"
            "Missing argument TAG\n"
            " → usage: githop release show <TAG>\n"
        ) % FaultCode.MISSING_ARGUMENT)


if __name__ == "__main__":
    unittest.main()
