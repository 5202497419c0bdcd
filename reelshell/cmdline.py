"""Command line splitting for the shell."""

from __future__ import annotations

from dataclasses import dataclass, field

from reelshell.jobs import MAXARGS, MAXLINE

_USAGE = (
    "Usage: shell [-hvp]\n"
    "   -h   print this message\n"
    "   -v   print additional diagnostic information\n"
    "   -p   do not emit a command prompt\n"
)


@dataclass
class ParsedCommand:
    """Arguments of a command line and whether it runs in the background."""

    argv: list[str] = field(default_factory=list)
    background: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.argv


def _next_delimiter(buf: str) -> tuple[str, int]:
    if buf.startswith("'"):
        buf = buf[1:]
        return buf, buf.find("'")
    return buf, buf.find(" ")


def parse_line(cmdline: str) -> ParsedCommand:
    """Split a command line into arguments.

    The final character (normally the newline) is treated as a space.
    Text between single quotes forms one argument. A blank line counts as
    a background request with no arguments; a last argument starting with
    '&' requests the background and is dropped.
    """
    text = cmdline[:MAXLINE]
    buf = text[:-1] + " " if text else ""
    buf = buf.lstrip(" ")

    argv: list[str] = []
    buf, delim = _next_delimiter(buf)
    while delim != -1:
        argv.append(buf[:delim])
        if len(argv) >= MAXARGS:
            raise ValueError(f"too many arguments (limit {MAXARGS - 1})")
        buf = buf[delim + 1 :].lstrip(" ")
        buf, delim = _next_delimiter(buf)

    if not argv:
        return ParsedCommand(argv=[], background=True)

    background = argv[-1].startswith("&")
    if background:
        argv.pop()
    return ParsedCommand(argv=argv, background=background)


def usage_text() -> str:
    """Help text for the shell's command line options."""
    return _USAGE