"""Sv39 page tables built over a simulated physical memory."""

from .riscv import (
    KERNBASE,
    MAXVA,
    PGSIZE,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    pa2pte,
    pgrounddown,
    pgroundup,
    pte2pa,
    pte_flags,
    px,
)

_PTES_PER_PAGE = 512
_PTE_SIZE = 8


class KernelPanic(RuntimeError):
    """An invariant the kernel relies on was violated."""


class PhysicalMemory:
    """A pool of ``npages`` physical pages starting at ``KERNBASE``."""

    def __init__(self, npages):
        if npages <= 0:
            raise ValueError("physical memory needs at least one page")
        self.base = KERNBASE
        self.npages = npages
        self.end = self.base + npages * PGSIZE
        self._data = bytearray(npages * PGSIZE)
        self._free = [self.base + i * PGSIZE for i in reversed(range(npages))]
        self._in_use = set()

    def kalloc(self):
        """Take a free page and return its physical address."""
        if not self._free:
            raise MemoryError("out of physical pages")
        pa = self._free.pop()
        self._in_use.add(pa)
        return pa

    def kfree(self, pa):
        """Return the page at ``pa`` to the pool."""
        if pa % PGSIZE or not self.base <= pa < self.end:
            raise KernelPanic("kfree")
        if pa not in self._in_use:
            raise KernelPanic("kfree: page not allocated")
        self._in_use.discard(pa)
        self._free.append(pa)

    def _offset(self, pa, n):
        if n < 0 or pa < self.base or pa + n > self.end:
            raise KernelPanic(f"physical access out of range at {pa:#x}")
        return pa - self.base

    def read(self, pa, n):
        """Read ``n`` bytes at physical address ``pa``."""
        off = self._offset(pa, n)
        return bytes(self._data[off:off + n])

    def write(self, pa, data):
        """Write ``data`` at physical address ``pa``."""
        data = bytes(data)
        off = self._offset(pa, len(data))
        self._data[off:off + len(data)] = data

    def free_pages(self):
        """Number of pages that can still be allocated."""
        return len(self._free)


class PageTable:
    """A three-level Sv39 page table whose pages live in ``memory``."""

    def __init__(self, memory):
        self.memory = memory
        self.root = memory.kalloc()
        self._zero(self.root)

    def _zero(self, pa):
        self.memory.write(pa, bytes(PGSIZE))

    def _load(self, pte_addr):
        return int.from_bytes(self.memory.read(pte_addr, _PTE_SIZE), "little")

    def _store(self, pte_addr, value):
        self.memory.write(pte_addr, value.to_bytes(_PTE_SIZE, "little"))

    def walk(self, va, alloc=False):
        """Return the physical address of the leaf PTE for ``va``.

        Returns None when a page-table page is missing and ``alloc`` is
        false; raises MemoryError when one cannot be allocated.
        """
        if va >= MAXVA:
            raise KernelPanic("walk")
        table = self.root
        for level in (2, 1):
            pte_addr = table + px(level, va) * _PTE_SIZE
            pte = self._load(pte_addr)
            if pte & PTE_V:
                table = pte2pa(pte)
            else:
                if not alloc:
                    return None
                table = self.memory.kalloc()
                self._zero(table)
                self._store(pte_addr, pa2pte(table) | PTE_V)
        return table + px(0, va) * _PTE_SIZE

    def walkaddr(self, va):
        """Physical address of the user page mapped at ``va``, or None."""
        if va >= MAXVA:
            return None
        pte_addr = self.walk(va)
        if pte_addr is None:
            return None
        pte = self._load(pte_addr)
        if not pte & PTE_V or not pte & PTE_U:
            return None
        return pte2pa(pte)

    def mappages(self, va, size, pa, perm):
        """Map ``size`` bytes at ``va`` to physical ``pa`` with ``perm``."""
        if va % PGSIZE:
            raise KernelPanic("mappages: va not aligned")
        if size % PGSIZE:
            raise KernelPanic("mappages: size not aligned")
        if size == 0:
            raise KernelPanic("mappages: size")
        for offset in range(0, size, PGSIZE):
            pte_addr = self.walk(va + offset, True)
            if self._load(pte_addr) & PTE_V:
                raise KernelPanic("mappages: remap")
            self._store(pte_addr, pa2pte(pa + offset) | perm | PTE_V)

    def unmap(self, va, npages, do_free):
        """Remove ``npages`` existing mappings from ``va``, optionally freeing them."""
        if va % PGSIZE:
            raise KernelPanic("uvmunmap: not aligned")
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            pte_addr = self.walk(a)
            if pte_addr is None:
                raise KernelPanic("uvmunmap: walk")
            pte = self._load(pte_addr)
            if not pte & PTE_V:
                raise KernelPanic("uvmunmap: not mapped")
            if pte_flags(pte) == PTE_V:
                raise KernelPanic("uvmunmap: not a leaf")
            if do_free:
                self.memory.kfree(pte2pa(pte))
            self._store(pte_addr, 0)

    def load_first(self, src):
        """Place ``src`` (less than a page) at address 0."""
        src = bytes(src)
        if len(src) >= PGSIZE:
            raise KernelPanic("uvmfirst: more than a page")
        mem = self.memory.kalloc()
        self._zero(mem)
        self.mappages(0, PGSIZE, mem, PTE_W | PTE_R | PTE_X | PTE_U)
        self.memory.write(mem, src)

    def grow(self, oldsz, newsz, xperm):
        """Grow user memory from ``oldsz`` to ``newsz``; return the new size."""
        if newsz < oldsz:
            return oldsz
        oldsz = pgroundup(oldsz)
        for a in range(oldsz, newsz, PGSIZE):
            try:
                mem = self.memory.kalloc()
            except MemoryError:
                self.shrink(a, oldsz)
                raise
            self._zero(mem)
            try:
                self.mappages(a, PGSIZE, mem, PTE_R | PTE_U | xperm)
            except MemoryError:
                self.memory.kfree(mem)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz, newsz):
        """Shrink user memory from ``oldsz`` to ``newsz``; return the new size."""
        if newsz >= oldsz:
            return oldsz
        if pgroundup(newsz) < pgroundup(oldsz):
            npages = (pgroundup(oldsz) - pgroundup(newsz)) // PGSIZE
            self.unmap(pgroundup(newsz), npages, True)
        return newsz

    def _freewalk(self, table):
        for i in range(_PTES_PER_PAGE):
            pte_addr = table + i * _PTE_SIZE
            pte = self._load(pte_addr)
            if pte & PTE_V and not pte & (PTE_R | PTE_W | PTE_X):
                self._freewalk(pte2pa(pte))
                self._store(pte_addr, 0)
            elif pte & PTE_V:
                raise KernelPanic("freewalk: leaf")
        self.memory.kfree(table)

    def free_walk(self):
        """Free every page-table page; all leaves must be unmapped already."""
        self._freewalk(self.root)

    def free(self, sz):
        """Free ``sz`` bytes of user memory and then the page table itself."""
        if sz > 0:
            self.unmap(0, pgroundup(sz) // PGSIZE, True)
        self.free_walk()

    def copy_to(self, other, sz):
        """Copy the first ``sz`` bytes of mappings and memory into ``other``."""
        i = 0
        try:
            for i in range(0, sz, PGSIZE):
                pte_addr = self.walk(i)
                if pte_addr is None:
                    raise KernelPanic("uvmcopy: pte should exist")
                pte = self._load(pte_addr)
                if not pte & PTE_V:
                    raise KernelPanic("uvmcopy: page not present")
                mem = self.memory.kalloc()
                self.memory.write(mem, self.memory.read(pte2pa(pte), PGSIZE))
                try:
                    other.mappages(i, PGSIZE, mem, pte_flags(pte))
                except MemoryError:
                    self.memory.kfree(mem)
                    raise
        except MemoryError:
            other.unmap(0, i // PGSIZE, True)
            raise

    def clear_user(self, va):
        """Make the page at ``va`` inaccessible to user mode."""
        pte_addr = self.walk(va)
        if pte_addr is None:
            raise KernelPanic("uvmclear")
        self._store(pte_addr, self._load(pte_addr) & ~PTE_U)

    def copyout(self, dstva, data):
        """Copy ``data`` to user address ``dstva``; ValueError on a bad address."""
        data = bytes(data)
        while data:
            va0 = pgrounddown(dstva)
            if va0 >= MAXVA:
                raise ValueError(f"bad user address {dstva:#x}")
            pte_addr = self.walk(va0)
            pte = 0 if pte_addr is None else self._load(pte_addr)
            if not (pte & PTE_V and pte & PTE_U and pte & PTE_W):
                raise ValueError(f"bad user address {dstva:#x}")
            n = min(PGSIZE - (dstva - va0), len(data))
            self.memory.write(pte2pa(pte) + (dstva - va0), data[:n])
            data = data[n:]
            dstva = va0 + PGSIZE

    def copyin(self, srcva, n):
        """Read ``n`` bytes from user address ``srcva``."""
        out = bytearray()
        while n > 0:
            va0 = pgrounddown(srcva)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise ValueError(f"bad user address {srcva:#x}")
            count = min(PGSIZE - (srcva - va0), n)
            out += self.memory.read(pa0 + (srcva - va0), count)
            n -= count
            srcva = va0 + PGSIZE
        return bytes(out)

    def copyinstr(self, srcva, max):
        """Read a NUL-terminated string of fewer than ``max`` bytes from ``srcva``."""
        out = bytearray()
        while max > 0:
            va0 = pgrounddown(srcva)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise ValueError(f"bad user address {srcva:#x}")
            count = min(PGSIZE - (srcva - va0), max)
            chunk = self.memory.read(pa0 + (srcva - va0), count)
            nul = chunk.find(b"\0")
            if nul >= 0:
                out += chunk[:nul]
                return bytes(out)
            out += chunk
            max -= count
            srcva = va0 + PGSIZE
        raise ValueError("string not terminated within the limit")