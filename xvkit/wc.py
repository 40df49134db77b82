"""Count lines, words and bytes."""

import sys
from dataclasses import dataclass

_CHUNK = 512
_SPACE = frozenset(b" \r\t\n\v\0")


@dataclass(frozen=True)
class Counts:
    """Line, word and byte counts of a stream."""

    lines: int = 0
    words: int = 0
    chars: int = 0


def wc(stream):
    """Count the lines, words and bytes of a binary stream."""
    lines = words = chars = 0
    inword = False
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        for b in chunk:
            chars += 1
            if b == 0x0A:
                lines += 1
            if b in _SPACE:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return Counts(lines, words, chars)


def _report(stream, name):
    try:
        c = wc(stream)
    except OSError:
        sys.stdout.write("wc: read error\n")
        return False
    sys.stdout.write(f"{c.lines} {c.words} {c.chars} {name}\n")
    return True


def main(argv=None):
    """Count the named files, or standard input; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return 0 if _report(sys.stdin.buffer, "") else 1
    for name in args:
        try:
            f = open(name, "rb")
        except OSError:
            sys.stdout.write(f"wc: cannot open {name}\n")
            return 1
        with f:
            if not _report(f, name):
                return 1
    return 0