[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xvkit"
version = "0.1.0"
description = "A small teaching-kernel toolkit: Sv39 page tables, a K&R heap, a printf subset, ELF headers, a shell command parser and classic Unix utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "riscv",
    "sv39",
    "page-table",
    "virtual-memory",
    "malloc",
    "shell",
    "elf",
    "grep",
    "teaching",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xvkit-cat = "xvkit.cat:main"
xvkit-echo = "xvkit.echo:main"
xvkit-grep = "xvkit.grep:main"
xvkit-wc = "xvkit.wc:main"
xvkit-ls = "xvkit.ls:main"
xvkit-kill = "xvkit.fileops:kill_main"
xvkit-ln = "xvkit.fileops:ln_main"
xvkit-rm = "xvkit.fileops:rm_main"
xvkit-mkdir = "xvkit.fileops:mkdir_main"

[tool.hatch.build.targets.wheel]
packages = ["xvkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
