# xvkit

A compact toolkit of the pieces of a teaching kernel and its user land,
written as plain Python so they can be read, run and tested on any host.

## What is inside

| Module            | What it gives you |
|-------------------|-------------------|
| `xvkit.riscv`     | Sv39 constants and helpers: `pgroundup`, `pgrounddown`, `pa2pte`, `pte2pa`, `pte_flags`, `px`, `make_satp`, `kstack`, plus memory-layout, system-parameter and open-flag constants (`O_RDONLY`, `O_WRONLY`, `O_RDWR`, `O_CREATE`, `O_TRUNC`) |
| `xvkit.elf`       | `ElfHeader` and `ProgramHeader` with `from_bytes` / `to_bytes`, `ElfHeader.is_valid`, `ProgramHeader.is_loadable`, the `program_headers` generator, and `ElfFormatError` for short or truncated input |
| `xvkit.vm`        | A simulated `PhysicalMemory` (`kalloc`, `kfree`, `read`, `write`, `free_pages`) and a three-level `PageTable` (`walk`, `walkaddr`, `mappages`, `unmap`, `load_first`, `grow`, `shrink`, `free_walk`, `free`, `copy_to`, `clear_user`, `copyout`, `copyin`, `copyinstr`); broken invariants raise `KernelPanic`, exhausted memory raises `MemoryError`, bad user addresses raise `ValueError` |
| `xvkit.umalloc`   | `Heap`, a first-fit free-list allocator with `sbrk`, `malloc`, `free` and `free_units` |
| `xvkit.fmt`       | `format` and `fprintf` for the small printf dialect (`%d %u %x %ld %lu %lx %lld %llu %llx %p %s %%`); integers are treated as 32-bit values and hex digits are upper case |
| `xvkit.strutil`   | `atoi`, `strcmp`, `memcmp` and `gets` with their classic semantics |
| `xvkit.rand`      | The Park–Miller generator: `do_rand` and `ParkMiller` |
| `xvkit.shell`     | `parse_cmd`, turning a command line into `ExecCmd`, `RedirCmd`, `PipeCmd`, `ListCmd` and `BackCmd` trees (bad input raises `ShellSyntaxError`), and `highlight_os`, which renders words with every `os` coloured blue |
| `xvkit.grep`      | `match` and `grep` for the `^ . * $` regular-expression subset |
| `xvkit.wc`        | `wc`, returning a `Counts` of lines, words and bytes |
| `xvkit.cat`, `xvkit.echo`, `xvkit.ls`, `xvkit.fileops` | The small command-line utilities (`cat`, `echo`, `fmtname`, `ls`, and `kill_main`, `ln_main`, `rm_main`, `mkdir_main`) |

The package has no third-party dependencies.

## Library use

```python
from xvkit.riscv import PTE_W, pgroundup, px
from xvkit.grep import match
from xvkit.fmt import format
from xvkit.shell import parse_cmd
from xvkit.vm import PhysicalMemory, PageTable

pgroundup(4097)             # 8192
px(0, 0x1000)               # 1
match("^ab*c$", "abbbc")    # True
format("%d %x", -5, 255)    # "-5 FF"

tree = parse_cmd("cat < in.txt | grep foo > out.txt")

memory = PhysicalMemory(64)
pagetable = PageTable(memory)
size = pagetable.grow(0, 8192, PTE_W)   # writable user pages
pagetable.copyout(100, b"hello")
pagetable.copyin(100, 5)    # b"hello"
```

`Heap` hands out addresses inside its own simulated break, so allocation
patterns, coalescing on `free`, and exhaustion at the heap's `limit`
(a `MemoryError`) behave like the classic K&R allocator.

## Command-line tools

Each utility is installed as a console command:

```
xvkit-cat [file ...]
xvkit-echo [word ...]
xvkit-grep pattern [file ...]
xvkit-wc [file ...]
xvkit-ls [path ...]
xvkit-kill pid ...
xvkit-ln old new
xvkit-rm file ...
xvkit-mkdir dir ...
```

With no file arguments, `xvkit-cat`, `xvkit-grep` and `xvkit-wc` read
standard input. `xvkit-wc` prints lines, words and bytes followed by the
name. `xvkit-ls` prints each entry's blank-padded name, type
(1 directory, 2 file, 3 other), inode number and size; for a directory it
lists `.`, `..` and then the entries in sorted order. These commands work
on the host's own files and processes.

## What it does not do

- The shell is a parser only: `parse_cmd` builds the command tree, but
  nothing runs it, and there is no interactive shell command.
- There is no kernel to boot, no scheduler, no file system image and no
  disk driver; page tables and the heap work over simulated memory only.
- `xvkit.elf` reads and writes headers but does not load programs.