"""Machine constants, memory layout and Sv39 page-table arithmetic."""

# System parameters.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 2000
MAXPATH = 128
USERSTACK = 1
NTHREAD = 4

# Flags for opening files.
O_RDONLY = 0x000
O_WRONLY = 0x001
O_RDWR = 0x002
O_CREATE = 0x200
O_TRUNC = 0x400

# Machine status register.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor and machine interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1
MIE_STIE = 1 << 5

SATP_SV39 = 8 << 60

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

# One beyond the highest usable virtual address (one bit short of Sv39).
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

# Physical memory layout of the virt machine.
UART0 = 0x10000000
UART0_IRQ = 10
VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1
PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000
KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

# Virtual layout shared by kernel and user space.
TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE

_UINT64 = (1 << 64) - 1


def pgroundup(sz):
    """Round ``sz`` up to a page boundary (64-bit arithmetic)."""
    return ((sz + PGSIZE - 1) & ~(PGSIZE - 1)) & _UINT64


def pgrounddown(a):
    """Round ``a`` down to a page boundary."""
    return (a & ~(PGSIZE - 1)) & _UINT64


def pa2pte(pa):
    """Shift a physical address into the PPN field of a PTE."""
    return ((pa & _UINT64) >> 12) << 10


def pte2pa(pte):
    """Extract the physical address a PTE points to."""
    return (pte >> 10) << 12


def pte_flags(pte):
    """Return the low ten flag bits of a PTE."""
    return pte & 0x3FF


def _pxshift(level):
    return PGSHIFT + 9 * level


def px(level, va):
    """Return the 9-bit page-table index of ``va`` at ``level``."""
    return ((va & _UINT64) >> _pxshift(level)) & PXMASK


def make_satp(pagetable):
    """Build an Sv39 satp value for a page table at physical ``pagetable``."""
    return SATP_SV39 | ((pagetable & _UINT64) >> 12)


def kstack(p):
    """Virtual address of the kernel stack of process slot ``p``."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE