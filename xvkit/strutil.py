"""Small C-string helpers with their C semantics."""


def _cbytes(s):
    data = s.encode() if isinstance(s, str) else bytes(s)
    nul = data.find(b"\0")
    return data if nul < 0 else data[:nul]


def atoi(s):
    """Parse the leading decimal digits of ``s``; no sign or whitespace."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def strcmp(p, q):
    """Compare NUL-terminated strings; return the difference of the first unequal bytes."""
    a, b = _cbytes(p), _cbytes(q)
    for x, y in zip(a + b"\0", b + b"\0"):
        if x != y or x == 0:
            return x - y
    return 0


def memcmp(a, b, n):
    """Compare the first ``n`` bytes of ``a`` and ``b`` as unsigned bytes."""
    if n > len(a) or n > len(b):
        raise ValueError(f"cannot compare {n} bytes of shorter buffers")
    for x, y in zip(bytes(a[:n]), bytes(b[:n])):
        if x != y:
            return x - y
    return 0


def gets(stream, max):
    """Read up to ``max - 1`` characters, stopping after a newline or carriage return."""
    empty = stream.read(0)
    chunks = []
    while len(chunks) + 1 < max:
        c = stream.read(1)
        if not c:
            break
        chunks.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    return empty.join(chunks)