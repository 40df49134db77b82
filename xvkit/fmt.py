"""Minimal printf: %d %u %x (with l/ll), %p, %s and %%."""

import operator
import re

_DIGITS = "0123456789ABCDEF"
_SPEC = re.compile(r"%(ll[dux]|l[dux]|.?)", re.DOTALL)
_INT_KINDS = {"d": (10, True), "u": (10, False), "x": (16, False)}
_INT_SPECS = {
    prefix + kind: params
    for prefix in ("", "l", "ll")
    for kind, params in _INT_KINDS.items()
}


def _int32(value):
    value = operator.index(value) & 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _printint(value, base, signed):
    xx = _int32(value)
    neg = signed and xx < 0
    x = -xx if neg else xx & 0xFFFFFFFF
    digits = []
    while True:
        x, r = divmod(x, base)
        digits.append(_DIGITS[r])
        if x == 0:
            break
    if neg:
        digits.append("-")
    return "".join(reversed(digits))


def _printptr(value):
    return f"0x{operator.index(value) & ((1 << 64) - 1):016X}"


def format(fmt, *args):
    """Expand ``fmt`` with ``args``; integers are taken as 32-bit values."""
    supply = iter(args)

    def take():
        try:
            return next(supply)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def expand(match):
        spec = match.group(1)
        if spec == "":
            return ""
        if spec in _INT_SPECS:
            base, signed = _INT_SPECS[spec]
            return _printint(take(), base, signed)
        if spec == "p":
            return _printptr(take())
        if spec == "s":
            s = take()
            return "(null)" if s is None else str(s)
        if spec == "%":
            return "%"
        return "%" + spec

    return _SPEC.sub(expand, fmt)


def fprintf(stream, fmt, *args):
    """Write the expansion of ``fmt`` to ``stream``."""
    stream.write(format(fmt, *args))