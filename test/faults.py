"""
Faults module behavioral tests (fault messages and stderr rendering).

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured by swapping funcli.faults.console.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from funcli import Fault, faults


class TestFault(TestCase):

    def testMembersAreMessages(self):
        self.assertEqual(Fault.UNKNOWN_OPTION, "Unknown option")
        self.assertEqual(Fault.OPTION_MISSING_VALUE, "Option missing value")
        self.assertEqual(Fault.UNEXPECTED_FLAG_VALUE, "Didn't expect value for flag argument")
        self.assertEqual(Fault.TOO_MANY_ARGUMENTS, "Too many arguments")
        self.assertEqual(Fault.MISSING_REQUIRED_ARGUMENT, "Missing required argument")
        self.assertEqual(Fault.COMMAND_NOT_FOUND, "Command not found")

    def testStr(self):
        self.assertEqual(str(Fault.COMMAND_NOT_FOUND), "Command not found")


class TestReport(TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        console = Console(file=self.stream, color_system=None, force_terminal=False, width=200)
        patcher = patch("funcli.faults.console", console)
        patcher.start()
        self.addCleanup(patcher.stop)

    def testLayout(self):
        faults.report(Fault.TOO_MANY_ARGUMENTS, "usage: tool a\n\n")
        self.assertEqual(self.stream.getvalue(), "error: Too many arguments\n\nusage: tool a\n\n")

    def testHostStylesAccepted(self):
        with patch("__main__.__styles__", {"error-label": "bold red"}, create=True):
            faults.report("Custom", "usage: tool\n\n")
        self.assertEqual(self.stream.getvalue(), "error: Custom\n\nusage: tool\n\n")

    def testPanicPrintsTraceback(self):
        try:
            raise ValueError("broken")
        except ValueError:
            faults.panic()
        self.assertIn("ValueError", self.stream.getvalue())
        self.assertIn("broken", self.stream.getvalue())


if __name__ == "__main__":
    unittest.main()
