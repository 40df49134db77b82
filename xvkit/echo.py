"""Print arguments separated by spaces."""

import sys


def echo(args):
    """Return the arguments joined by spaces and ended by a newline."""
    args = list(args)
    return " ".join(args) + "\n" if args else ""


def main(argv=None):
    """Write the arguments to standard output."""
    args = sys.argv[1:] if argv is None else list(argv)
    sys.stdout.write(echo(args))
    return 0