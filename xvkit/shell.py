"""Command-line parsing for the shell, and its built-in ``!`` echo."""

from dataclasses import dataclass, field

from .riscv import O_CREATE, O_RDONLY, O_TRUNC, O_WRONLY

MAXARGS = 10
MAX_MESSAGE = 512

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"

BLUE = "\033[34m"
RESET = "\033[0m"


class ShellSyntaxError(ValueError):
    """The command line cannot be parsed."""


@dataclass
class ExecCmd:
    """Run a program with its arguments; ``argv[0]`` names the program."""

    argv: list = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with descriptor ``fd`` reopened on ``file`` with ``mode``."""

    cmd: object
    file: str
    mode: int
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of ``left`` to the input of ``right``."""

    left: object
    right: object


@dataclass
class ListCmd:
    """Run ``left`` to completion, then ``right``."""

    left: object
    right: object


@dataclass
class BackCmd:
    """Run ``cmd`` without waiting for it."""

    cmd: object


class _Parser:
    def __init__(self, text):
        nul = text.find("\0")
        self.text = text if nul < 0 else text[:nul]
        self.pos = 0

    def skip_space(self):
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def at_end(self):
        self.skip_space()
        return self.pos >= len(self.text)

    def peek(self, toks):
        self.skip_space()
        return self.pos < len(self.text) and self.text[self.pos] in toks

    def gettoken(self):
        """Consume one token; return its kind and its text.

        Kinds are "" at the end of input, the symbol itself for
        ``| ( ) ; & < >``, ">>" for append, and "a" for a word.
        """
        self.skip_space()
        text, start = self.text, self.pos
        end = start
        if start >= len(text):
            kind = ""
        elif text[start] in "|();&<":
            kind, end = text[start], start + 1
        elif text[start] == ">":
            if text.startswith(">>", start):
                kind, end = ">>", start + 2
            else:
                kind, end = ">", start + 1
        else:
            kind = "a"
            while (end < len(text) and text[end] not in WHITESPACE
                   and text[end] not in SYMBOLS):
                end += 1
        self.pos = end
        self.skip_space()
        return kind, text[start:end]

    def line(self):
        cmd = self.pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self):
        cmd = self.exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd):
        while self.peek("<>"):
            tok, _ = self.gettoken()
            kind, word = self.gettoken()
            if kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if tok == "<":
                cmd = RedirCmd(cmd, word, O_RDONLY, 0)
            elif tok == ">":
                cmd = RedirCmd(cmd, word, O_WRONLY | O_CREATE | O_TRUNC, 1)
            else:
                cmd = RedirCmd(cmd, word, O_WRONLY | O_CREATE, 1)
        return cmd

    def block(self):
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.redirs(cmd)

    def exec(self):
        if self.peek("("):
            return self.block()
        cmd = ExecCmd()
        ret = self.redirs(cmd)
        while not self.peek("|)&;"):
            kind, word = self.gettoken()
            if kind == "":
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            cmd.argv.append(word)
            if len(cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def parse_cmd(s):
    """Parse a command line into a command tree; ShellSyntaxError on bad input."""
    parser = _Parser(s)
    cmd = parser.line()
    if not parser.at_end():
        rest = parser.text[parser.pos:]
        raise ShellSyntaxError(f"syntax (leftovers: {rest})")
    return cmd


def highlight_os(words):
    """Render the arguments of ``!``: each word and a space, "os" in blue, then a newline.

    Returns an empty string for no words; ValueError if the first word
    is longer than the message limit.
    """
    words = list(words)
    if not words:
        return ""
    if len(words[0]) > MAX_MESSAGE:
        raise ValueError("Message Too Long")
    coloured = BLUE + "os" + RESET
    return "".join(word.replace("os", coloured) + " " for word in words) + "\n"