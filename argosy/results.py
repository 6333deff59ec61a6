"""
Argosy parse results.

ParsedArgs is what Parser.parse() hands back on success. It stays plain:
- flags: set of long names that were present.
- options: dict of long name -> raw string value (last occurrence wins).
- positional: list of bare tokens, in encounter order.

get_value_as() is the only typed-conversion boundary; everything else stays strings.
"""
from .faults import InvalidValueError


class ParsedArgs:
    """
    Structured result of a successful parse, owned by the caller.

    Example
        >>> args = ParsedArgs(options={"port": "8080"})
        >>> args.get_value_as("port", int)
        8080
        >>> args.get_value_as("missing", int) is None
        True
    """

    def __init__(self, flags=(), options=(), positional=()):
        self.flags = set(flags)
        self.options = dict(options)
        self.positional = list(positional)

    def flag(self, name, /):
        """
        Whether the flag registered as 'name' was present.
        """
        return name in self.flags

    def option(self, name, default=None, /):
        """
        The raw string value of option 'name', or default when absent.
        """
        return self.options.get(name, default)

    def get_value_as(self, name, type, /):
        """
        Get the value of option 'name' converted with 'type'.

        'type' is any callable accepting a string: int, float, pathlib.Path,
        a custom parser, etc.

        Returns
        - None when the option was not provided.
        - type(value) when the conversion succeeds.

        Raises
        - InvalidValueError (from the converter's exception) when the
          conversion fails; the original exception is kept as __cause__.
        """
        if not callable(type):
            raise TypeError("get_value_as() 'type' must be callable")
        try:
            value = self.options[name]
        except KeyError:
            return None
        try:
            return type(value)
        except Exception as exception:
            raise InvalidValueError(name, value=value) from exception

    def __eq__(self, other):
        if not isinstance(other, ParsedArgs):
            return NotImplemented
        return (
            self.flags == other.flags and
            self.options == other.options and
            self.positional == other.positional
        )

    __hash__ = None

    def __rich_repr__(self):
        yield "flags", self.flags
        yield "options", self.options
        yield "positional", self.positional

    def __repr__(self):
        return "parsed-args(flags=%r, options=%r, positional=%r)" % (self.flags, self.options, self.positional)


__all__ = (
    "ParsedArgs",
)
