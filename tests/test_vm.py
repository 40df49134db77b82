import pytest

from xvkit.riscv import MAXVA, PGSIZE, PTE_U, PTE_V, PTE_W, PTE_X, PTE_R, pte2pa
from xvkit.vm import KernelPanic, PageTable, PhysicalMemory


@pytest.fixture
def memory():
    return PhysicalMemory(32)


def test_kalloc_exhaustion_raises():
    mem = PhysicalMemory(2)
    mem.kalloc()
    mem.kalloc()
    with pytest.raises(MemoryError):
        mem.kalloc()


def test_kfree_misaligned_panics(memory):
    pa = memory.kalloc()
    with pytest.raises(KernelPanic):
        memory.kfree(pa + 1)


def test_memory_read_write_round_trip(memory):
    pa = memory.kalloc()
    memory.write(pa + 10, b"abc")
    assert memory.read(pa + 10, 3) == b"abc"


def test_new_table_uses_one_page(memory):
    PageTable(memory)
    assert memory.free_pages() == memory.npages - 1


def test_grow_then_free_returns_all_pages(memory):
    pt = PageTable(memory)
    sz = pt.grow(0, 3 * PGSIZE + 5, PTE_W)
    assert sz == 3 * PGSIZE + 5
    assert all(pt.walkaddr(a) is not None for a in range(0, 4 * PGSIZE, PGSIZE))
    pt.free(sz)
    assert memory.free_pages() == memory.npages


def test_grow_smaller_returns_old_size(memory):
    pt = PageTable(memory)
    assert pt.grow(2 * PGSIZE, PGSIZE, PTE_W) == 2 * PGSIZE


def test_shrink_unmaps_pages(memory):
    pt = PageTable(memory)
    pt.grow(0, 3 * PGSIZE, PTE_W)
    assert pt.shrink(3 * PGSIZE, PGSIZE) == PGSIZE
    assert pt.walkaddr(0) is not None
    assert pt.walkaddr(PGSIZE) is None
    assert pt.walkaddr(2 * PGSIZE) is None


def test_copyout_copyin_across_page_boundary(memory):
    pt = PageTable(memory)
    pt.grow(0, 2 * PGSIZE, PTE_W)
    data = bytes(range(200))
    pt.copyout(PGSIZE - 50, data)
    assert pt.copyin(PGSIZE - 50, len(data)) == data


def test_copyinstr_stops_at_nul(memory):
    pt = PageTable(memory)
    pt.grow(0, 2 * PGSIZE, PTE_W)
    pt.copyout(PGSIZE - 3, b"hello\0tail")
    assert pt.copyinstr(PGSIZE - 3, 100) == b"hello"


def test_copyinstr_without_room_for_nul_fails(memory):
    pt = PageTable(memory)
    pt.grow(0, PGSIZE, PTE_W)
    pt.copyout(0, b"hello\0")
    with pytest.raises(ValueError):
        pt.copyinstr(0, 5)


def test_copyin_unmapped_fails(memory):
    pt = PageTable(memory)
    with pytest.raises(ValueError):
        pt.copyin(0, 1)


def test_copyout_beyond_maxva_fails(memory):
    pt = PageTable(memory)
    with pytest.raises(ValueError):
        pt.copyout(MAXVA, b"x")


def test_copyout_to_read_only_page_fails(memory):
    pt = PageTable(memory)
    pt.grow(0, PGSIZE, 0)
    with pytest.raises(ValueError):
        pt.copyout(0, b"x")
    assert pt.copyin(0, 4) == bytes(4)


def test_clear_user_hides_page(memory):
    pt = PageTable(memory)
    pt.grow(0, PGSIZE, PTE_W)
    pt.clear_user(0)
    assert pt.walkaddr(0) is None
    with pytest.raises(ValueError):
        pt.copyin(0, 1)


def test_walk_beyond_maxva_panics(memory):
    pt = PageTable(memory)
    with pytest.raises(KernelPanic):
        pt.walk(MAXVA)


def test_walk_without_alloc_on_empty_table(memory):
    pt = PageTable(memory)
    assert pt.walk(0) is None


def test_mappages_unaligned_panics(memory):
    pt = PageTable(memory)
    with pytest.raises(KernelPanic):
        pt.mappages(1, PGSIZE, memory.kalloc(), PTE_R)
    with pytest.raises(KernelPanic):
        pt.mappages(0, 100, memory.kalloc(), PTE_R)
    with pytest.raises(KernelPanic):
        pt.mappages(0, 0, memory.kalloc(), PTE_R)


def test_mappages_remap_panics(memory):
    pt = PageTable(memory)
    pa = memory.kalloc()
    pt.mappages(0, PGSIZE, pa, PTE_R | PTE_U)
    with pytest.raises(KernelPanic):
        pt.mappages(0, PGSIZE, pa, PTE_R | PTE_U)


def test_mappages_sets_pte(memory):
    pt = PageTable(memory)
    pa = memory.kalloc()
    pt.mappages(PGSIZE, PGSIZE, pa, PTE_R | PTE_U)
    assert pt.walkaddr(PGSIZE) == pa
    pte = int.from_bytes(memory.read(pt.walk(PGSIZE), 8), "little")
    assert pte & PTE_V
    assert pte2pa(pte) == pa


def test_unmap_missing_panics(memory):
    pt = PageTable(memory)
    pt.grow(0, PGSIZE, PTE_W)
    with pytest.raises(KernelPanic):
        pt.unmap(PGSIZE, 1, True)


def test_free_walk_with_leaf_panics(memory):
    pt = PageTable(memory)
    pt.grow(0, PGSIZE, PTE_W)
    with pytest.raises(KernelPanic):
        pt.free_walk()


def test_load_first(memory):
    pt = PageTable(memory)
    pt.load_first(b"initcode")
    assert pt.copyin(0, 8) == b"initcode"
    pte = int.from_bytes(memory.read(pt.walk(0), 8), "little")
    assert pte & (PTE_R | PTE_W | PTE_X | PTE_U) == PTE_R | PTE_W | PTE_X | PTE_U


def test_load_first_too_big_panics(memory):
    pt = PageTable(memory)
    with pytest.raises(KernelPanic):
        pt.load_first(bytes(PGSIZE))


def test_grow_out_of_memory_undoes_pages():
    mem = PhysicalMemory(4)
    pt = PageTable(mem)
    with pytest.raises(MemoryError):
        pt.grow(0, 5 * PGSIZE, PTE_W)
    assert pt.walkaddr(0) is None


def test_grow_mapping_failure_frees_page():
    mem = PhysicalMemory(2)
    pt = PageTable(mem)
    before = mem.free_pages()
    with pytest.raises(MemoryError):
        pt.grow(0, PGSIZE, PTE_W)
    assert mem.free_pages() == before


def test_copy_to_is_independent(memory):
    parent = PageTable(memory)
    parent.grow(0, 2 * PGSIZE, PTE_W)
    parent.copyout(100, b"parent data")
    child = PageTable(memory)
    parent.copy_to(child, 2 * PGSIZE)
    assert child.copyin(100, 11) == b"parent data"
    parent.copyout(100, b"changed....")
    assert child.copyin(100, 11) == b"parent data"
    assert child.walkaddr(0) != parent.walkaddr(0)


def test_copy_to_out_of_memory_cleans_child():
    mem = PhysicalMemory(8)
    parent = PageTable(mem)
    parent.grow(0, 2 * PGSIZE, PTE_W)
    child = PageTable(mem)
    while mem.free_pages() > 3:
        mem.kalloc()
    with pytest.raises(MemoryError):
        parent.copy_to(child, 2 * PGSIZE)
    assert child.walkaddr(0) is None