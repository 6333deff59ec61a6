r"""
Argosy argument definitions.

Overview
- Definitions (a closed, tagged union; the class is the kind)
  • Flag: named, presence-only switch (no payload), e.g. -v/--verbose.
  • Option: named, value-bearing switch taking exactly one following token, e.g. -o/--output.
  • Positional: bare-token argument, identified by order rather than by a name token.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ via read-only properties.

Fields (sanitized on assignment)
- Shared
  • long_name: non-empty string, the stable key in every parse result.
  • help: string shown in the help listing (defaults to "").
  • required: bool (defaults to False).
- Switches only (Flag/Option)
  • short_name: None or a single character looked up inside short clusters.

Mutability
- Fields are read-only from the outside. Registry handles
  (argosy.registry.ArgumentHandle) are the only writers, and each handle only
  ever writes the definition it was created for.

Quick example:
    >>> flag = Flag("verbose")
    >>> flag.long_name, flag.short_name, flag.required
    ('verbose', None, False)
"""
import functools
import operator
import re

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns definition classes into introspectable records.

    Responsibilities
    - Derive __typename__ from the class name (used in messages).
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation, e.g. flag(long_name='verbose', ...).
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, value) pairs for pretty printers (e.g., rich).
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_long_name(cls, long_name, /):
    """
    Internal: validate a long name.

    Rules
    - must be a string (TypeError otherwise).
    - must be non-empty after trimming and must not start with '-' (ValueError);
      the '--' prefix is added by users on the command line, not here.

    Returns the trimmed name.
    """
    if not isinstance(long_name, str):
        raise TypeError(f"{cls.__typename__} 'long_name' must be a string")
    elif not (long_name := long_name.strip()):
        raise ValueError(f"{cls.__typename__} 'long_name' cannot be empty")
    elif long_name.startswith("-"):
        raise ValueError(f"{cls.__typename__} 'long_name' must be given without dashes (got {long_name!r})")
    return long_name


def _sanitize_short_name(cls, short_name, /):
    """
    Internal: validate a short name.

    Rules
    - must be a string of exactly one character (TypeError / ValueError).
    - '-' and whitespace are rejected: they can never appear inside a cluster
      in a meaningful way.
    """
    if not isinstance(short_name, str):
        raise TypeError(f"{cls.__typename__} 'short_name' must be a string")
    elif len(short_name) != 1:
        raise ValueError(f"{cls.__typename__} 'short_name' must be a single character (got {short_name!r})")
    elif short_name == "-" or short_name.isspace():
        raise ValueError(f"{cls.__typename__} 'short_name' cannot be {short_name!r}")
    return short_name


def _sanitize_help(cls, help, /):
    if not isinstance(help, str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    return help


class Flag(metaclass=ArgumentType):
    """
    Named, presence-only switch.

    A flag carries no value: its presence on the command line adds its long
    name to ParsedArgs.flags. Repeating it is idempotent.
    """

    __introspectable__ = (
        "long_name",
        "short_name",
        "help",
        "required",
    )

    def __init__(self, long_name, /):
        self._long_name = _sanitize_long_name(type(self), long_name)
        self._short_name = None
        self._help = ""
        self._required = False


class Option(metaclass=ArgumentType):
    """
    Named, value-bearing switch.

    An option consumes exactly the next token as its value, verbatim. When
    repeated, the last value wins. Inside a short cluster it may only appear
    as the last character.
    """

    __introspectable__ = (
        "long_name",
        "short_name",
        "help",
        "required",
    )

    def __init__(self, long_name, /):
        self._long_name = _sanitize_long_name(type(self), long_name)
        self._short_name = None
        self._help = ""
        self._required = False


class Positional(metaclass=ArgumentType):
    """
    Bare-token argument.

    Positionals are never matched by name: every bare token lands in
    ParsedArgs.positional in encounter order. A definition exists for the help
    listing and for required-ness, checked per slot (the n-th positional
    definition needs at least n bare tokens).
    """

    __introspectable__ = (
        "long_name",
        "help",
        "required",
    )

    def __init__(self, long_name, /):
        self._long_name = _sanitize_long_name(type(self), long_name)
        self._help = ""
        self._required = False


__all__ = (
    "Flag",
    "Option",
    "Positional",
)
