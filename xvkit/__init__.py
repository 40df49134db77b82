"""Teaching-kernel building blocks: page tables, a heap, printf, ELF headers, a shell parser and utilities."""

__version__ = "0.1.0"