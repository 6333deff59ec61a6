"""
Argosy help rendering.

Layout (byte-for-byte)
    Usage: <program> [OPTIONS] [ARGUMENTS]

    Options:
      -<short>, <long padded to 20> <help>
          <long padded to 20> <help>          (no short name)

    Arguments:
      <long padded to 22> <help>

- Flags and options share the "Options" section, positionals are listed under
  "Arguments"; both keep registration order.
- Section headers are always printed, even for empty sections.
- Long names are shown without their "--" prefix.
"""
from .arguments import Flag, Option, Positional

USAGE_TEMPLATE = "Usage: %s [OPTIONS] [ARGUMENTS]\n"
OPTIONS_HEADER = "\nOptions:\n"
ARGUMENTS_HEADER = "\nArguments:\n"

INDENT = "  "
SHORT_TEMPLATE = "-%s, "
NO_SHORT = " " * len(SHORT_TEMPLATE % "x")

SWITCH_COLUMN = 20
POSITIONAL_COLUMN = 22


def render_switch(argument, /):
    """
    Render one Options line for a Flag or Option.
    """
    short = NO_SHORT if argument.short_name is None else SHORT_TEMPLATE % argument.short_name
    return f"{INDENT}{short}{argument.long_name:<{SWITCH_COLUMN}} {argument.help}\n"


def render_positional(argument, /):
    return f"{INDENT}{argument.long_name:<{POSITIONAL_COLUMN}} {argument.help}\n"


def render(prog, arguments, /):
    """
    Render the complete help text for a program and its definitions.

    Parameters
    - prog: str, the program name shown in the usage line.
    - arguments: iterable of Flag | Option | Positional, in registration order.
    """
    switches = []
    positionals = []
    for argument in arguments:
        match argument:
            case Flag() | Option():
                switches.append(render_switch(argument))
            case Positional():
                positionals.append(render_positional(argument))
            case _:
                raise TypeError(f"render() cannot list {type(argument).__name__!r} objects")

    return "".join([
        USAGE_TEMPLATE % prog,
        OPTIONS_HEADER,
        *switches,
        ARGUMENTS_HEADER,
        *positionals,
    ])


__all__ = (
    "render",
    "render_switch",
    "render_positional",
    "USAGE_TEMPLATE",
    "SWITCH_COLUMN",
    "POSITIONAL_COLUMN",
)
