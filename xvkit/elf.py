"""ELF64 executable headers."""

import struct
from dataclasses import dataclass
from typing import ClassVar

ELF_MAGIC = 0x464C457F  # "\x7FELF" read little-endian

ELF_PROG_LOAD = 1

ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4


class ElfFormatError(ValueError):
    """Raised when bytes do not hold a well-formed header."""


@dataclass(frozen=True)
class ElfHeader:
    """The ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<I12sHHIQQQIHHHHHH")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def from_bytes(cls, data):
        """Decode a header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ElfFormatError(
                f"ELF header needs {cls.SIZE} bytes, got {len(data)}"
            )
        return cls(*cls._STRUCT.unpack_from(data))

    def to_bytes(self):
        """Encode the header."""
        return self._STRUCT.pack(
            self.magic, self.elf, self.type, self.machine, self.version,
            self.entry, self.phoff, self.shoff, self.flags, self.ehsize,
            self.phentsize, self.phnum, self.shentsize, self.shnum,
            self.shstrndx,
        )

    def is_valid(self):
        """True if the magic number is the ELF one."""
        return self.magic == ELF_MAGIC


@dataclass(frozen=True)
class ProgramHeader:
    """An ELF program (segment) header."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIQQQQQQ")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def from_bytes(cls, data):
        """Decode a program header from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ElfFormatError(
                f"program header needs {cls.SIZE} bytes, got {len(data)}"
            )
        return cls(*cls._STRUCT.unpack_from(data))

    def to_bytes(self):
        """Encode the program header."""
        return self._STRUCT.pack(
            self.type, self.flags, self.off, self.vaddr, self.paddr,
            self.filesz, self.memsz, self.align,
        )

    def is_loadable(self):
        """True for a segment that is to be loaded into memory."""
        return self.type == ELF_PROG_LOAD


def program_headers(data, header):
    """Yield the program headers that ``header`` describes within ``data``."""
    stride = ProgramHeader.SIZE
    for off in range(header.phoff, header.phoff + header.phnum * stride, stride):
        chunk = data[off:off + stride]
        if len(chunk) < stride:
            raise ElfFormatError(f"program header at offset {off} is truncated")
        yield ProgramHeader.from_bytes(chunk)