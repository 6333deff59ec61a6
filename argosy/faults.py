"""
Argosy faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
- ParseError: base type carrying the offending name + options; knows how to
  render itself in a friendly, lowercased and actionable way.
- One subclass per failure cause (closed taxonomy):
  • UnknownArgumentError: token or short character matching no definition.
  • MissingValueForOptionError: option given as the last token/cluster character.
  • OptionInMiddleOfGroupError: value-bearing option before the end of a cluster.
  • HelpRequested: explicit --help/-h, modeled as a fault to short-circuit parsing.
  • MissingRequiredArgumentError: validation found a required definition unsatisfied.
  • InvalidValueError: typed access to an option whose value does not convert.
- trigger(): central entry point to surface a fault (print-and-exit in shell mode, raise otherwise).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The parser raises faults directly (fail-fast); hosts that want the friendly
  output call trigger(fault, shell=True, ...) or simply Parser.run().
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - tokenization (1111x): UNKNOWN_ARGUMENT, MISSING_VALUE, OPTION_IN_GROUP
    - validation (1112x): MISSING_REQUIRED
    - typed access (1113x): INVALID_VALUE
    - control flow (1210x): HELP_REQUESTED

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- tokenization errors (1111x) ---
    UNKNOWN_ARGUMENT = 11111
    MISSING_VALUE    = 11112
    OPTION_IN_GROUP  = 11113

    # --- validation errors (1112x) ---
    MISSING_REQUIRED = 11121

    # --- typed access errors (1113x) ---
    INVALID_VALUE    = 11131

    # --- control flow (1210x) ---
    HELP_REQUESTED   = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base class of every parse fault.

    attributes
    - name: the offending name (long name, short character or unknown token), None for help.
    - options: read-only rendering context (prog, colorful, fancy, shell, ...).

    subclasses set __code__, __title__, __template__ and __hint__; str(fault) is
    the rendered one-line message.
    """
    __code__ = Unset
    __title__ = "parse error"
    __template__ = "%r"
    __hint__ = "try '%s --help' to see all available arguments"

    def __init__(self, name=Unset, /, **options):
        assert isinstance(name, str | Unset)
        self.name = coalesce(name)
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    @property
    def code(self):
        return self.__code__

    @property
    def title(self):
        return self.__title__

    @property
    def message(self):
        if self.name is None:
            return ""
        return self.__template__ % self.name

    @property
    def hint(self):
        return self.options.get("hint", self.__hint__ % self.options.get("prog", "<program>"))

    def __str__(self):
        return self.message

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.name)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash((type(self), self.name))

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "<program>")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(Unset if self.name is None else self.name, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class UnknownArgumentError(ParseError):
    __code__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"
    __template__ = "unknown argument: '%s'"


class MissingValueForOptionError(ParseError):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing option value"
    __template__ = "missing value for option: '%s'"
    __hint__ = "pass a value after the option (for example: %s --option <value>)"


class OptionInMiddleOfGroupError(ParseError):
    """
    a value-bearing short option sat before the end of a cluster (e.g. -oa).

    note: the message is lowercased ("option 'output' cannot ...") like every
    other fault; older renderings capitalized it as "Option 'output' ...".
    """
    __code__ = FaultCode.OPTION_IN_GROUP
    __title__ = "option inside a group"
    __template__ = "option '%s' cannot be in the middle of the group"
    __hint__ = "move the option to the end of the group or pass it on its own (for example: %s -o <value>)"


class MissingRequiredArgumentError(ParseError):
    __code__ = FaultCode.MISSING_REQUIRED
    __title__ = "missing required argument"
    __template__ = "missing required argument '%s'"


class InvalidValueError(ParseError):
    """
    raised by typed accessors when an option's value does not convert.

    the converter's own exception is kept both as __cause__ and as .exception.
    """
    __code__ = FaultCode.INVALID_VALUE
    __title__ = "invalid option value"
    __template__ = "invalid value for option: '%s'"
    __valued__ = "invalid value %r for option: '%s'"

    @property
    def message(self):
        if "value" in self.options:
            return self.__valued__ % (self.options["value"], self.name)
        return super().message

    @property
    def exception(self):
        return self.__cause__

    @property
    def hint(self):
        if "hint" in self.options or self.__cause__ is None:
            return super().hint
        return str(self.__cause__)


class HelpRequested(ParseError):
    """
    the user asked for help (--help or -h).

    not a true error: it carries no name and no message. when triggered with a
    'help' option it renders that text instead of a fault header.
    """
    __code__ = FaultCode.HELP_REQUESTED
    __title__ = "help requested"

    def __init__(self, *unused, **options):
        assert not unused, "help requests carry no name"
        super().__init__(**options)

    def __repr__(self):
        return "HelpRequested()"

    def __rich__(self):
        return Text(self.options.get("help", ""), end="")

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(**{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseError).
    - options are merged into a copy of the fault via __replace__(**options) before triggering.
    - in shell mode, the fault is printed via the rich console and the process exits
      with status 1; otherwise the merged fault is raised.

    typical options
    - prog, shell, fancy, colorful, hint, help (HelpRequested only).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownArgumentError",
    "MissingValueForOptionError",
    "OptionInMiddleOfGroupError",
    "MissingRequiredArgumentError",
    "InvalidValueError",
    "HelpRequested",
    "trigger",
    "getdoc",
)
