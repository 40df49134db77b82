import pytest

from xvkit.elf import (
    ELF_MAGIC,
    ELF_PROG_FLAG_EXEC,
    ELF_PROG_FLAG_READ,
    ELF_PROG_FLAG_WRITE,
    ELF_PROG_LOAD,
    ElfFormatError,
    ElfHeader,
    ProgramHeader,
    program_headers,
)


def _header(**kw):
    fields = dict(entry=0x1000, phoff=ElfHeader.SIZE, phnum=2, machine=243, type=2)
    fields.update(kw)
    return ElfHeader(**fields)


def test_header_round_trip():
    h = _header(elf=b"\x02\x01\x01" + bytes(9), shoff=0x2000, shnum=5)
    assert ElfHeader.from_bytes(h.to_bytes()) == h


def test_header_starts_with_magic_bytes():
    data = ElfHeader().to_bytes()
    assert data[:4] == b"\x7fELF"
    assert ElfHeader.from_bytes(data).magic == ELF_MAGIC
    assert ElfHeader.from_bytes(data).is_valid()


def test_wrong_magic_is_invalid():
    assert not ElfHeader(magic=0).is_valid()
    assert not ElfHeader.from_bytes(b"MZ" + bytes(62)).is_valid()


def test_encoded_sizes():
    assert len(ElfHeader().to_bytes()) == ElfHeader.SIZE == 64
    assert len(ProgramHeader().to_bytes()) == ProgramHeader.SIZE == 56


def test_short_header_raises():
    data = _header().to_bytes()
    with pytest.raises(ElfFormatError):
        ElfHeader.from_bytes(data[:-1])
    with pytest.raises(ElfFormatError):
        ProgramHeader.from_bytes(bytes(ProgramHeader.SIZE - 1))


def test_trailing_bytes_are_ignored():
    h = _header()
    assert ElfHeader.from_bytes(h.to_bytes() + b"extra") == h


def test_program_headers_are_read_in_order():
    text = ProgramHeader(
        type=ELF_PROG_LOAD,
        flags=ELF_PROG_FLAG_READ | ELF_PROG_FLAG_EXEC,
        off=0x1000, vaddr=0, filesz=0x800, memsz=0x800, align=0x1000,
    )
    note = ProgramHeader(type=4, flags=ELF_PROG_FLAG_READ | ELF_PROG_FLAG_WRITE)
    h = _header()
    image = h.to_bytes() + text.to_bytes() + note.to_bytes()
    phs = list(program_headers(image, ElfHeader.from_bytes(image)))
    assert phs == [text, note]
    assert [p.is_loadable() for p in phs] == [True, False]


def test_program_header_round_trip():
    ph = ProgramHeader(type=ELF_PROG_LOAD, off=7, vaddr=8, paddr=9, filesz=10, memsz=11, align=12)
    assert ProgramHeader.from_bytes(ph.to_bytes()) == ph


def test_truncated_program_table_raises():
    h = _header(phnum=2)
    image = h.to_bytes() + ProgramHeader().to_bytes()
    with pytest.raises(ElfFormatError):
        list(program_headers(image, h))