"""
Parser tokenization tests.

Scope
- Validate help short-circuit, long flags/options, short clusters and positionals.
- Validate fail-fast faults and the names they carry.
- Validate that parsing never mutates the registry (reusable parsers).

Conventions
- Test method names follow CamelCase per project convention.
- Argument vectors always start with a program name, as sys.argv does.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import (
    Parser,
    HelpRequested,
    UnknownArgumentError,
    MissingValueForOptionError,
    OptionInMiddleOfGroupError,
)


def _parser():
    parser = Parser("program")
    parser.add_flag("verbose").with_short_name("v").with_help("increases the verbosity")
    parser.add_flag("all").with_short_name("a").with_help("list everything")
    parser.add_option("output").with_short_name("o").with_help("where the output goes")
    parser.add_positional("input").with_help("the input file")
    return parser


class TestHelp(TestCase):
    """Help tokens terminate parsing before any other interpretation."""

    def testLongHelp(self):
        with self.assertRaises(HelpRequested):
            _parser().parse(["program", "--help"])

    def testShortHelp(self):
        with self.assertRaises(HelpRequested):
            _parser().parse(["program", "-h"])

    def testHelpAfterValidTokens(self):
        with self.assertRaises(HelpRequested):
            _parser().parse(["program", "-v", "file.txt", "--help", "--bogus"])

    def testHelpWinsOverRegisteredNames(self):
        parser = Parser("program")
        parser.add_flag("help").with_short_name("h")
        with self.assertRaises(HelpRequested):
            parser.parse(["program", "--help"])
        with self.assertRaises(HelpRequested):
            parser.parse(["program", "-h"])

    def testHelpSkipsValidation(self):
        parser = Parser("program")
        parser.add_option("output").required()
        with self.assertRaises(HelpRequested):
            parser.parse(["program", "-h"])

    def testEarlierFaultWinsOverHelp(self):
        with self.assertRaises(UnknownArgumentError):
            _parser().parse(["program", "--bogus", "--help"])

    def testHelpAsOptionValueIsAValue(self):
        args = _parser().parse(["program", "--output", "--help"])
        self.assertEqual(args.options, {"output": "--help"})

    def testHelpCarriesNoName(self):
        with self.assertRaises(HelpRequested) as context:
            _parser().parse(["program", "--help"])
        self.assertIsNone(context.exception.name)
        self.assertEqual(str(context.exception), "")


class TestLongTokens(TestCase):
    """Behavioral tests for '--name' tokens."""

    def testLongFlag(self):
        args = _parser().parse(["program", "--verbose"])
        self.assertEqual(args.flags, {"verbose"})

    def testRepeatedLongFlagIsRecordedOnce(self):
        args = _parser().parse(["program", "--verbose", "--verbose", "-v"])
        self.assertEqual(args.flags, {"verbose"})

    def testLongOption(self):
        args = _parser().parse(["program", "--output", "file.txt"])
        self.assertEqual(args.options, {"output": "file.txt"})

    def testRepeatedOptionLastWriteWins(self):
        args = _parser().parse(["program", "--output", "v1", "-o", "v2"])
        self.assertEqual(args.options["output"], "v2")

    def testOptionValueTakenVerbatim(self):
        args = _parser().parse(["program", "--output", "-v"])
        self.assertEqual(args.options["output"], "-v")
        self.assertEqual(args.flags, set())

    def testOptionValueMayBeEmpty(self):
        args = _parser().parse(["program", "--output", ""])
        self.assertEqual(args.options["output"], "")

    def testUnknownLongArgument(self):
        with self.assertRaises(UnknownArgumentError) as context:
            _parser().parse(["program", "--bogus"])
        self.assertEqual(context.exception.name, "bogus")

    def testDoubleDashAloneIsUnknown(self):
        with self.assertRaises(UnknownArgumentError) as context:
            _parser().parse(["program", "--"])
        self.assertEqual(context.exception.name, "")

    def testPositionalNameIsNotALongName(self):
        with self.assertRaises(UnknownArgumentError) as context:
            _parser().parse(["program", "--input", "file.txt"])
        self.assertEqual(context.exception.name, "input")

    def testMissingValueForOption(self):
        with self.assertRaises(MissingValueForOptionError) as context:
            _parser().parse(["program", "--output"])
        self.assertEqual(context.exception.name, "output")


class TestShortClusters(TestCase):
    """Behavioral tests for '-abc' tokens."""

    def testSingleShortFlag(self):
        args = _parser().parse(["program", "-v"])
        self.assertEqual(args.flags, {"verbose"})

    def testGroupedFlags(self):
        args = _parser().parse(["program", "-av"])
        self.assertEqual(args.flags, {"all", "verbose"})

    def testShortOptionWithValue(self):
        args = _parser().parse(["program", "-o", "value"])
        self.assertEqual(args.options, {"output": "value"})

    def testOptionLastInGroup(self):
        args = _parser().parse(["program", "-vo", "file.txt"])
        self.assertEqual(args.flags, {"verbose"})
        self.assertEqual(args.options, {"output": "file.txt"})
        self.assertEqual(args.positional, [])

    def testOptionInMiddleOfGroup(self):
        with self.assertRaises(OptionInMiddleOfGroupError) as context:
            _parser().parse(["program", "-ov", "file.txt"])
        self.assertEqual(context.exception.name, "output")

    def testOptionLastInGroupWithoutValue(self):
        with self.assertRaises(MissingValueForOptionError) as context:
            _parser().parse(["program", "-avo"])
        self.assertEqual(context.exception.name, "output")

    def testUnknownShortCharacter(self):
        with self.assertRaises(UnknownArgumentError) as context:
            _parser().parse(["program", "-x"])
        self.assertEqual(context.exception.name, "x")

    def testUnknownCharacterInsideGroupAborts(self):
        with self.assertRaises(UnknownArgumentError) as context:
            _parser().parse(["program", "-vxa"])
        self.assertEqual(context.exception.name, "x")

    def testHelpCharacterInsideGroupIsAShortName(self):
        with self.assertRaises(UnknownArgumentError) as context:
            _parser().parse(["program", "-vh"])
        self.assertEqual(context.exception.name, "h")

    def testLoneDashIsPositional(self):
        args = _parser().parse(["program", "-"])
        self.assertEqual(args.positional, ["-"])


class TestPositionals(TestCase):
    """Behavioral tests for bare tokens."""

    def testPositionalArgument(self):
        args = _parser().parse(["program", "data.csv"])
        self.assertEqual(args.positional, ["data.csv"])

    def testPositionalsKeepEncounterOrder(self):
        args = _parser().parse(["program", "b", "-v", "a", "c"])
        self.assertEqual(args.positional, ["b", "a", "c"])

    def testUndeclaredPositionalsAreCollected(self):
        parser = Parser("program")
        args = parser.parse(["program", "one", "two"])
        self.assertEqual(args.positional, ["one", "two"])

    def testMixedArguments(self):
        args = _parser().parse(["program", "-v", "the_input.txt", "--output", "out.log"])
        self.assertEqual(args.flags, {"verbose"})
        self.assertEqual(args.positional, ["the_input.txt"])
        self.assertEqual(args.options, {"output": "out.log"})


class TestTokenStream(TestCase):
    """Program-name handling, input validation and reuse."""

    def testProgramNameIsDiscarded(self):
        args = _parser().parse(["--verbose"])
        self.assertEqual(args.flags, set())
        self.assertEqual(args.positional, [])

    def testEmptyVector(self):
        args = _parser().parse([])
        self.assertEqual((args.flags, args.options, args.positional), (set(), {}, []))

    def testAcceptsAnyIterable(self):
        args = _parser().parse(iter(("program", "-a", "x")))
        self.assertEqual(args.flags, {"all"})
        self.assertEqual(args.positional, ["x"])

    def testRejectsString(self):
        with self.assertRaises(TypeError):
            _parser().parse("program --verbose")

    def testRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            _parser().parse(["program", 1])

    def testParserIsReusable(self):
        parser = _parser()
        first = parser.parse(["program", "-v", "a"])
        second = parser.parse(["program", "-o", "x"])
        self.assertEqual(first.flags, {"verbose"})
        self.assertEqual(first.options, {})
        self.assertEqual(second.flags, set())
        self.assertEqual(second.options, {"output": "x"})

    def testFailedParseLeavesRegistryUntouched(self):
        parser = _parser()
        before = [repr(argument) for argument in parser.arguments]
        with self.assertRaises(UnknownArgumentError):
            parser.parse(["program", "-v", "--bogus"])
        self.assertEqual([repr(argument) for argument in parser.arguments], before)


if __name__ == "__main__":
    unittest.main()
