"""Concatenate files to standard output."""

import sys

_CHUNK = 512


def cat(src, out):
    """Copy binary stream ``src`` to ``out``; OSError names a read or write error."""
    while True:
        try:
            chunk = src.read(_CHUNK)
        except OSError as exc:
            raise OSError("read error") from exc
        if not chunk:
            return
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise OSError("write error") from exc
        if written is not None and written != len(chunk):
            raise OSError("write error")


def main(argv=None):
    """Copy the named files, or standard input, to standard output."""
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout.buffer
    try:
        if not args:
            cat(sys.stdin.buffer, out)
            return 0
        for name in args:
            try:
                f = open(name, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {name}\n")
                return 1
            with f:
                cat(f, out)
    except OSError as exc:
        sys.stderr.write(f"cat: {exc}\n")
        return 1
    finally:
        out.flush()
    return 0