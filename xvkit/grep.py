"""A grep that understands only the ^ . * $ operators."""

import sys

_BUFSIZE = 1024


def _matchhere(re, text):
    while True:
        if not re:
            return True
        if len(re) > 1 and re[1] == "*":
            return _matchstar(re[0], re[2:], text)
        if re == "$":
            return text == ""
        if text and (re[0] == "." or re[0] == text[0]):
            re, text = re[1:], text[1:]
            continue
        return False


def _matchstar(c, re, text):
    i = 0
    while True:
        if _matchhere(re, text[i:]):
            return True
        if i < len(text) and (text[i] == c or c == "."):
            i += 1
            continue
        return False


def match(re, text):
    """True if the pattern ``re`` matches anywhere in ``text``."""
    if re.startswith("^"):
        return _matchhere(re[1:], text)
    return any(_matchhere(re, text[i:]) for i in range(len(text) + 1))


def grep(pattern, stream, out):
    """Write each newline-terminated line of ``stream`` that matches ``pattern``.

    A final line without a newline is ignored, and reading stops once a
    single line fills the line buffer.
    """
    pending = ""
    while True:
        room = _BUFSIZE - 1 - len(pending)
        if room <= 0:
            break
        chunk = stream.read(room)
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                out.write(line + "\n")


def main(argv=None):
    """Run grep over the named files, or standard input; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, files = args[0], args[1:]
    if not files:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for name in files:
        try:
            f = open(name, newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {name}\n")
            return 1
        with f:
            grep(pattern, f, sys.stdout)
    return 0