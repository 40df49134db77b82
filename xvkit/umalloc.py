"""A first-fit free-list allocator over a simulated, growable heap."""

HEADER_SIZE = 16
MIN_CORE_UNITS = 4096


class Heap:
    """A break-based heap of at most ``limit`` bytes with malloc and free.

    Addresses are byte offsets from the start of the heap. Every block
    is preceded by a header of ``HEADER_SIZE`` bytes and sized in
    header-sized units.
    """

    def __init__(self, limit):
        if limit < 0:
            raise ValueError("limit must not be negative")
        self.limit = limit
        self._brk = 0
        self._base = -HEADER_SIZE  # the sentinel lies below the heap
        self._size = {}
        self._next = {}
        self._freep = None
        self._allocated = set()

    def sbrk(self, n):
        """Move the break by ``n`` bytes and return the old break."""
        old = self._brk
        new = old + n
        if new < 0 or new > self.limit:
            raise MemoryError(f"cannot move break from {old} by {n}")
        self._brk = new
        return old

    def _end(self, h):
        return h + self._size[h] * HEADER_SIZE

    def _release(self, bp):
        nxt = self._next
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        after = nxt[p]
        if self._end(bp) == after:
            self._size[bp] += self._size[after]
            nxt[bp] = nxt[after]
            del self._size[after], nxt[after]
        else:
            nxt[bp] = after
        if self._end(p) == bp:
            self._size[p] += self._size[bp]
            nxt[p] = nxt[bp]
            del self._size[bp], nxt[bp]
        else:
            nxt[p] = bp
        self._freep = p

    def _morecore(self, nunits):
        nunits = max(nunits, MIN_CORE_UNITS)
        hp = self.sbrk(nunits * HEADER_SIZE)
        self._size[hp] = nunits
        self._release(hp)
        return self._freep

    def malloc(self, nbytes):
        """Allocate ``nbytes`` and return the address; MemoryError when the heap is full."""
        if nbytes < 0:
            raise ValueError("cannot allocate a negative size")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._freep = self._base
            self._size[self._base] = 0
            self._next[self._base] = self._base
        prevp = self._freep
        p = self._next[prevp]
        while True:
            if self._size[p] >= nunits:
                if self._size[p] == nunits:
                    self._next[prevp] = self._next[p]
                else:
                    self._size[p] -= nunits
                    p += self._size[p] * HEADER_SIZE
                    self._size[p] = nunits
                self._freep = prevp
                self._allocated.add(p)
                return p + HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
            prevp, p = p, self._next[p]

    def free(self, addr):
        """Return the block at ``addr`` to the free list."""
        bp = addr - HEADER_SIZE
        if bp not in self._allocated:
            raise ValueError(f"address {addr} is not an allocated block")
        self._allocated.discard(bp)
        self._release(bp)

    def free_units(self):
        """Total size, in header units, of the blocks on the free list."""
        if self._freep is None:
            return 0
        total = 0
        p = self._next[self._base]
        while p != self._base:
            total += self._size[p]
            p = self._next[p]
        return total