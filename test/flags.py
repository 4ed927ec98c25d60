# python
"""
Flag grammar behavioral tests.

Scope
- Validate switch declarations (names, shorts, defaults, sealing, duplicates).
- Validate parsing: long/short spellings, clusters, inline values, unique prefixes.
- Validate order independence and repeated-value accumulation.
- Validate pass-through tolerance for unknown tokens and the "--" terminator.
- Validate usage faults (ambiguous prefix, missing value, bad boolean value).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import dataclasses
import unittest
from unittest import TestCase

from githop.arguments import Arguments
from githop.faults import AmbiguousSwitchError, FlagValueError, MissingValueError
from githop.flags import Grammar, Kind, Switch


def createGrammar():
    grammar = Grammar("release-create")
    grammar.declare(Kind.BOOL, "draft", "d")
    grammar.declare(Kind.BOOL, "prerelease", "p")
    grammar.declare(Kind.STRINGS, "attach", "a", metavar="FILE")
    grammar.declare(Kind.STRING, "message", "m")
    grammar.declare(Kind.STRING, "commitish", "c", metavar="COMMIT")
    return grammar


class TestSwitch(TestCase):
    """Behavioral tests for Switch declarations."""

    def testDefaultsFollowKind(self):
        self.assertIs(Switch(Kind.BOOL, "draft").default, False)
        self.assertEqual(Switch(Kind.STRING, "message").default, "")
        self.assertEqual(Switch(Kind.STRINGS, "attach").default, ())

    def testNamesShortFirst(self):
        self.assertEqual(Switch(Kind.BOOL, "include-drafts", "d").names, ("-d", "--include-drafts"))
        self.assertEqual(Switch(Kind.BOOL, "verbose").names, ("--verbose",))

    def testAttributeReplacesHyphens(self):
        self.assertEqual(Switch(Kind.BOOL, "show-downloads").attribute, "show_downloads")

    def testMetavarDefaultsForValueSwitches(self):
        self.assertEqual(Switch(Kind.STRING, "message").metavar, "MESSAGE")
        self.assertIsNone(Switch(Kind.BOOL, "draft").metavar)

    def testInvalidNamesRejected(self):
        with self.assertRaises(ValueError):
            Switch(Kind.BOOL, "--draft")
        with self.assertRaises(ValueError):
            Switch(Kind.BOOL, "draft", "dd")

    def testDefaultTypeChecked(self):
        with self.assertRaises(TypeError):
            Switch(Kind.BOOL, "draft", "d", "yes")
        with self.assertRaises(TypeError):
            Switch(Kind.STRINGS, "attach", "a", "file")


class TestGrammarDeclarations(TestCase):
    """Behavioral tests for Grammar declarations and the generated namespace."""

    def testDuplicateLongRejected(self):
        grammar = Grammar()
        grammar.declare(Kind.BOOL, "draft", "d")
        with self.assertRaises(ValueError):
            grammar.declare(Kind.BOOL, "draft")

    def testDuplicateShortRejected(self):
        grammar = Grammar()
        grammar.declare(Kind.BOOL, "draft", "d")
        with self.assertRaises(ValueError):
            grammar.declare(Kind.BOOL, "downloads", "d")

    def testSealedGrammarRejectsDeclarations(self):
        grammar = Grammar()
        grammar.seal()
        with self.assertRaises(TypeError):
            grammar.declare(Kind.BOOL, "draft")

    def testNamespaceIsFrozenDataclass(self):
        flags = createGrammar().defaults()
        self.assertEqual(type(flags).__name__, "ReleaseCreateFlags")
        self.assertTrue(dataclasses.is_dataclass(flags))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            flags.draft = True

    def testDefaultsNamespace(self):
        flags = createGrammar().defaults()
        self.assertFalse(flags.draft)
        self.assertEqual(flags.attach, ())
        self.assertEqual(flags.message, "")


class TestGrammarParsing(TestCase):
    """Behavioral tests for Grammar.parse()."""

    def testOrderIndependentExtraction(self):
        grammar = createGrammar()
        first = Arguments(["-d", "-m", "Title", "v1.0"])
        second = Arguments(["v1.0", "-m", "Title", "-d"])
        self.assertEqual(grammar.parse(first), grammar.parse(second))
        self.assertEqual(first.array(), ["v1.0"])
        self.assertEqual(second.array(), ["v1.0"])

    def testRepeatedValuesAccumulateInOrder(self):
        args = Arguments(["-a", "f1", "v1.0", "--attach", "f2#label", "-a=f3"])
        flags = createGrammar().parse(args)
        self.assertEqual(flags.attach, ("f1", "f2#label", "f3"))
        self.assertEqual(args.array(), ["v1.0"])

    def testLastStringOccurrenceWins(self):
        flags = createGrammar().parse(Arguments(["-m", "one", "--message=two"]))
        self.assertEqual(flags.message, "two")

    def testBooleanCluster(self):
        args = Arguments(["-dp", "v1.0"])
        flags = createGrammar().parse(args)
        self.assertTrue(flags.draft)
        self.assertTrue(flags.prerelease)
        self.assertEqual(args.array(), ["v1.0"])

    def testClusterEndingWithValueSwitch(self):
        args = Arguments(["-dpa", "file.tgz", "v1.0"])
        flags = createGrammar().parse(args)
        self.assertEqual(flags.attach, ("file.tgz",))
        self.assertTrue(flags.draft and flags.prerelease)
        self.assertEqual(args.array(), ["v1.0"])

    def testAttachedShortValue(self):
        flags = createGrammar().parse(Arguments(["-cmain"]))
        self.assertEqual(flags.commitish, "main")

    def testUniqueLongPrefix(self):
        flags = createGrammar().parse(Arguments(["--pre", "--comm", "abc"]))
        self.assertTrue(flags.prerelease)
        self.assertEqual(flags.commitish, "abc")

    def testAmbiguousPrefixRaises(self):
        grammar = Grammar()
        grammar.declare(Kind.BOOL, "draft")
        grammar.declare(Kind.BOOL, "dry")
        with self.assertRaises(AmbiguousSwitchError) as caught:
            grammar.parse(Arguments(["--dr"]))
        self.assertEqual(caught.exception.status, 2)

    def testMissingValueRaises(self):
        with self.assertRaises(MissingValueError):
            createGrammar().parse(Arguments(["v1.0", "-m"]))
        with self.assertRaises(MissingValueError):
            createGrammar().parse(Arguments(["--message"]))

    def testBooleanInlineValues(self):
        grammar = createGrammar()
        self.assertFalse(grammar.parse(Arguments(["--draft=false"])).draft)
        self.assertTrue(grammar.parse(Arguments(["--draft=TRUE"])).draft)
        with self.assertRaises(FlagValueError):
            grammar.parse(Arguments(["--draft=maybe"]))

    def testUnknownTokensStayInPlace(self):
        args = Arguments(["-v", "--verbose", "-d", "-xd", "origin"])
        flags = createGrammar().parse(args)
        self.assertTrue(flags.draft)
        self.assertEqual(args.array(), ["-v", "--verbose", "-xd", "origin"])

    def testTerminatorStopsScanning(self):
        args = Arguments(["-d", "--", "-p"])
        flags = createGrammar().parse(args)
        self.assertTrue(flags.draft)
        self.assertFalse(flags.prerelease)
        self.assertEqual(args.array(), ["--", "-p"])

    def testLoneDashIsPositional(self):
        args = Arguments(["-", "-d"])
        createGrammar().parse(args)
        self.assertEqual(args.array(), ["-"])

    def testCommandPathUntouched(self):
        args = Arguments(["release", "create", "-d", "v1"])
        args.consume()
        args.consume()
        createGrammar().parse(args)
        self.assertEqual(args.argv(), ["release", "create", "v1"])


if __name__ == "__main__":
    unittest.main()
