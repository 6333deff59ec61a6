"""
Argosy parser: tokenize an argument vector against a registry, then validate.

What this module provides
- Parser: a Registry that can parse. Define arguments with add_flag /
  add_option / add_positional, then call parse(argv).

Token classification (evaluated once per token, left to right)
1. '--help' or '-h' → HelpRequested, before anything else, even when 'help'
   or 'h' are registered names.
2. '--name' → the flag/option registered under 'name':
   • unknown → UnknownArgumentError(name)
   • flag → recorded in flags (idempotent)
   • option → the next token is its value, verbatim (last one wins);
     no next token → MissingValueForOptionError(name)
3. '-abc' (single dash, not exactly '-') → a cluster of short names, each
   resolved on its own:
   • unknown character → UnknownArgumentError(character)
   • flag → recorded, continue with the next character
   • option → only allowed as the last character, where it takes the next
     token as its value; anywhere else → OptionInMiddleOfGroupError(name)
4. anything else (including a lone '-') → appended to positional.

Validation (after the whole stream was consumed)
- definitions are checked in registration order; the first unsatisfied
  required one raises MissingRequiredArgumentError(long_name).
- a required positional is satisfied when any bare token was received; with
  strict_positionals=True the n-th positional definition needs at least n.

Error policy
- fail-fast: the first fault aborts the parse, no partial result is returned.

Quick start
    from argosy import Parser

    parser = Parser("tool")
    parser.add_flag("verbose").with_short_name("v").with_help("Talk more.")
    parser.add_option("output").with_short_name("o").with_help("Output file.")
    parser.add_positional("input").with_help("Input file.").required()

    args = parser.run()  # prints help/faults and exits on failure
"""
import logging
import sys
from collections import deque
from collections.abc import Iterable

from .arguments import Flag, Option, Positional
from .faults import (
    HelpRequested,
    MissingRequiredArgumentError,
    MissingValueForOptionError,
    OptionInMiddleOfGroupError,
    ParseError,
    UnknownArgumentError,
    trigger,
)
from .registry import Registry
from .results import ParsedArgs
from .utils import Unset

logger = logging.getLogger(__name__)

HELP_TOKENS = frozenset(("--help", "-h"))


class Parser(Registry):
    """
    Argument registry plus the parsing and validation passes.

    Parameters
    - prog: Unset | str
      Program name for the usage line and fault headers (defaults to the
      basename of sys.argv[0]).
    - colorful: bool
      Style faults printed by run() (plain text when False).
    - fancy: bool
      Wrap faults printed by run() in a panel.
    - strict_positionals: bool
      Validate required positionals per slot: the n-th positional definition
      needs at least n bare tokens. Off by default, where a required
      positional is satisfied by any bare token at all.

    A parser is never written to by parse(), so it can be reused for any
    number of parses.
    """

    def __init__(self, prog=Unset, /, *, colorful=True, fancy=False, strict_positionals=False):
        super().__init__(prog)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self.strict_positionals = bool(strict_positionals)

    def parse(self, tokens=Unset, /):
        """
        Parse a full argument vector (program name first) into ParsedArgs.

        Parameters
        - tokens: Unset | Iterable[str]
          The argument vector; the first item is discarded as the program
          name. Defaults to sys.argv.

        Raises
        - HelpRequested, UnknownArgumentError, MissingValueForOptionError,
          OptionInMiddleOfGroupError, MissingRequiredArgumentError.
        - TypeError: when tokens is not an iterable of strings.
        """
        tokens = self._tokenize(sys.argv if tokens is Unset else tokens)
        logger.debug("parsing %d token(s) for %r", len(tokens), self.prog)

        results = ParsedArgs()
        while tokens:
            token = tokens.popleft()

            if token in HELP_TOKENS:
                raise HelpRequested()

            if token.startswith("--"):
                self._parse_long(token[2:], tokens, results)
            elif token.startswith("-") and token != "-":
                self._parse_cluster(token[1:], tokens, results)
            else:
                results.positional.append(token)

        self.validate(results)
        return results

    def validate(self, results, /):
        """
        Check required-ness of every definition against a result, in registration order.

        Raises MissingRequiredArgumentError for the first unsatisfied definition.

        Known limitation: by default a required positional only checks that at
        least one bare token was received, so several required positionals
        cannot be told apart. Pass strict_positionals=True to the parser to
        check each slot instead.
        """
        slot = 0
        for argument in self._arguments:
            match argument:
                case Flag():
                    provided = argument.long_name in results.flags
                case Option():
                    provided = argument.long_name in results.options
                case Positional():
                    slot += 1
                    if self.strict_positionals:
                        provided = len(results.positional) >= slot
                    else:
                        provided = bool(results.positional)

            if argument.required and not provided:
                logger.debug("required %s %r was not provided", type(argument).__typename__, argument.long_name)
                raise MissingRequiredArgumentError(argument.long_name)

    def run(self, tokens=Unset, /):
        """
        Host-side wrapper around parse(): on any fault, print it (or the help
        text for HelpRequested) to stderr and exit with status 1.
        """
        try:
            return self.parse(tokens)
        except HelpRequested as fault:
            trigger(fault, help=self.generate_help(), shell=True)
        except ParseError as fault:
            trigger(fault, prog=self.prog, shell=True, colorful=self.colorful, fancy=self.fancy)

    def _parse_long(self, name, tokens, results):
        argument = self.find_long(name)
        match argument:
            case None:
                raise UnknownArgumentError(name)
            case Flag():
                results.flags.add(argument.long_name)
            case Option():
                self._take_value(argument, tokens, results)

    def _parse_cluster(self, cluster, tokens, results):
        last = len(cluster) - 1
        for index, character in enumerate(cluster):
            argument = self.find_short(character)
            match argument:
                case None:
                    raise UnknownArgumentError(character)
                case Flag():
                    results.flags.add(argument.long_name)
                case Option() if index == last:
                    self._take_value(argument, tokens, results)
                case Option():
                    raise OptionInMiddleOfGroupError(argument.long_name)

    @staticmethod
    def _take_value(argument, tokens, results):
        try:
            value = tokens.popleft()
        except IndexError:
            raise MissingValueForOptionError(argument.long_name) from None
        logger.debug("option %r takes %r", argument.long_name, value)
        results.options[argument.long_name] = value

    @staticmethod
    def _tokenize(tokens):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = deque(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be an iterable of strings")
        if tokens:
            tokens.popleft()  # program name
        return tokens


__all__ = (
    "Parser",
)
