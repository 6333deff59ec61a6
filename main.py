import logging
import sys

from rich.logging import RichHandler
from rich.pretty import pprint

from argosy import Parser, InvalidValueError, trigger

VERBOSE_TOKENS = frozenset(("-v", "--verbose"))

parser = Parser("argosy-demo")
parser.add_flag("verbose").with_short_name("v").with_help("Log every parsing step.")
parser.add_flag("all").with_short_name("a").with_help("List all items.")
parser.add_option("output").with_short_name("o").with_help("Specify output file.")
parser.add_option("port").with_short_name("p").with_help("Port to listen on.")
parser.add_positional("input").with_help("The input file to process.").required()


def main(argv=None):
    argv = sys.argv if argv is None else argv
    # logging must be live before parsing, so the verbose flag is sniffed from the raw vector
    level = logging.DEBUG if VERBOSE_TOKENS.intersection(argv[1:]) else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", handlers=[RichHandler()])

    args = parser.run(argv)
    try:
        port = args.get_value_as("port", int)
    except InvalidValueError as fault:
        trigger(fault, prog=parser.prog, shell=True)
    pprint(args)
    pprint({"port": port})


if __name__ == '__main__':
    main()
