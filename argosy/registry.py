"""
Argosy definition registry.

What this module provides
- Registry: an ordered collection of argument definitions (Flag, Option,
  Positional) built incrementally before parsing. It stores, looks up by
  name, and renders the help listing; it never parses.
- ArgumentHandle: returned by every add_* call and bound to the definition
  it created. Configuration calls (with_short_name, with_help, required)
  only ever touch that definition, so they can be chained, stored and
  called later without affecting anything registered in between.

Lookup collections
- switches: long name -> Flag | Option. Positionals are kept apart, so a
  prefixed token can only ever resolve to a flag or an option.
- shorts: short character -> Flag | Option.
- positionals: Positional definitions in registration order (slot order).

Name policy
- long names are unique across all definitions, short names across all
  flags/options; a clash raises ValueError at registration time.
"""
import logging
import os.path
import sys
from types import MappingProxyType

from . import helptext
from .arguments import Flag, Option, Positional, _sanitize_help, _sanitize_short_name
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)


class ArgumentHandle:
    """
    Configuration handle bound to one registered definition.

    Example
        >>> registry = Registry("tool")
        >>> output = registry.add_option("output")
        >>> verbose = registry.add_flag("verbose").with_short_name("v")
        >>> output.with_short_name("o").required()  # still configures 'output'
        handle(option(long_name='output', short_name='o', help='', required=True))
    """
    __slots__ = ("_registry", "_argument")

    def __init__(self, registry, argument, /):
        self._registry = registry
        self._argument = argument

    @property
    def argument(self):
        return self._argument

    def with_short_name(self, short_name, /):
        """
        Give the flag/option a single-character alias usable in clusters.

        Raises
        - TypeError: for positional definitions, or when short_name is not a string.
        - ValueError: when short_name is not a single usable character or is
          already taken by another flag/option.
        """
        argument = self._argument
        if isinstance(argument, Positional):
            raise TypeError(f"{type(argument).__typename__} cannot have a 'short_name'")
        self._registry._bind_short(argument, _sanitize_short_name(type(argument), short_name))
        return self

    def with_help(self, help, /):
        self._argument._help = _sanitize_help(type(self._argument), help)
        return self

    def required(self, required=True, /):
        """
        Mark the definition as required (or not, with required(False)).
        """
        self._argument._required = bool(required)
        return self

    def __repr__(self):
        return "handle(%r)" % (self._argument,)


class Registry:
    """
    Ordered collection of argument definitions.

    Parameters
    - prog: Unset | str
      Program name shown in the usage line. Defaults to the basename of sys.argv[0].
    """

    def __init__(self, prog=Unset, /):
        if not isinstance(prog, str | Unset):
            raise TypeError("registry 'prog' must be a string")
        self._prog = coalesce(prog, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program")
        self._arguments = []
        self._switches = {}
        self._shorts = {}
        self._positionals = []

    @property
    def prog(self):
        return self._prog

    @property
    def arguments(self):
        """
        Every definition, in registration order.
        """
        return tuple(self._arguments)

    @property
    def switches(self):
        """
        Read-only mapping of long name -> Flag | Option.
        """
        return MappingProxyType(self._switches)

    @property
    def positionals(self):
        return tuple(self._positionals)

    def add_flag(self, long_name, /):
        """
        Define a presence-only flag (e.g., --verbose, -v once a short name is set).
        """
        return self._add(Flag(long_name))

    def add_option(self, long_name, /):
        """
        Define an option taking the next token as its value (e.g., --output <file>).
        """
        return self._add(Option(long_name))

    def add_positional(self, long_name, /):
        """
        Define a positional argument (e.g., <input-file>).
        """
        return self._add(Positional(long_name))

    def find_long(self, long_name, /):
        """
        Return the Flag/Option registered under long_name, or None.
        """
        return self._switches.get(long_name)

    def find_short(self, short_name, /):
        """
        Return the Flag/Option registered under short_name, or None.
        """
        return self._shorts.get(short_name)

    def generate_help(self):
        """
        Render the fixed-layout help text (see argosy.helptext).
        """
        return helptext.render(self._prog, self._arguments)

    def _add(self, argument):
        if any(x.long_name == argument.long_name for x in self._arguments):
            raise ValueError(f"{type(argument).__typename__} {argument.long_name!r} is already defined")

        self._arguments.append(argument)
        match argument:
            case Flag() | Option():
                self._switches[argument.long_name] = argument
            case Positional():
                self._positionals.append(argument)

        logger.debug("registered %s %r", type(argument).__typename__, argument.long_name)
        return ArgumentHandle(self, argument)

    def _bind_short(self, argument, short_name):
        owner = self._shorts.get(short_name)
        if owner is argument:
            return
        if owner is not None:
            raise ValueError(
                f"{type(argument).__typename__} short name {short_name!r} is already used by {owner.long_name!r}"
            )
        if argument.short_name is not None:
            del self._shorts[argument.short_name]
        self._shorts[short_name] = argument
        argument._short_name = short_name


__all__ = (
    "Registry",
    "ArgumentHandle",
)
