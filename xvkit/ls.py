"""List files and directories."""

import os
import stat
import sys
from enum import IntEnum

DIRSIZ = 14
_BUFSIZE = 512


class FileType(IntEnum):
    """The kind of file reported in a listing."""

    DIR = 1
    FILE = 2
    DEVICE = 3


def fmtname(path):
    """The last component of ``path``, blank-padded to ``DIRSIZ`` if shorter."""
    name = path.rsplit("/", 1)[-1]
    return name if len(name) >= DIRSIZ else name.ljust(DIRSIZ)


def _file_type(st):
    if stat.S_ISDIR(st.st_mode):
        return FileType.DIR
    if stat.S_ISREG(st.st_mode):
        return FileType.FILE
    return FileType.DEVICE


def _line(path, st):
    return f"{fmtname(path)} {int(_file_type(st))} {st.st_ino} {st.st_size}\n"


def ls(path, out, err):
    """Write a listing of ``path`` to ``out``; failures to open go to ``err``."""
    try:
        st = os.stat(path)
    except OSError:
        err.write(f"ls: cannot open {path}\n")
        return
    if _file_type(st) is not FileType.DIR:
        out.write(_line(path, st))
        return
    if len(os.fsencode(path)) + 1 + DIRSIZ + 1 > _BUFSIZE:
        out.write("ls: path too long\n")
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        err.write(f"ls: cannot open {path}\n")
        return
    for name in (".", "..", *names):
        entry = f"{path}/{name}"
        try:
            est = os.stat(entry)
        except OSError:
            out.write(f"ls: cannot stat {entry}\n")
            continue
        out.write(_line(entry, est))


def main(argv=None):
    """List each named path, or the current directory; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    for path in args or ["."]:
        ls(path, sys.stdout, sys.stderr)
    return 0