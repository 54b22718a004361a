"""Console output for the sweep and report CLIs."""

from __future__ import annotations

import sys

WIDTH = 70


class C:
    """ANSI codes, empty when stdout is not a terminal."""

    _tty = sys.stdout.isatty()
    GREEN = "\033[0;32m" if _tty else ""
    CYAN = "\033[0;36m" if _tty else ""
    YELLOW = "\033[1;33m" if _tty else ""
    BOLD = "\033[1m" if _tty else ""
    NC = "\033[0m" if _tty else ""


def _tagged(colour: str, tag: str, msg: str) -> None:
    print(f"{colour}[{tag}]{C.NC} {msg}")


def info(msg: str) -> None:
    _tagged(C.CYAN, "INFO", msg)


def ok(msg: str) -> None:
    _tagged(C.GREEN, " OK ", msg)


def warn(msg: str) -> None:
    _tagged(C.YELLOW, "WARN", msg)


def framed(title: str, rule: str, width: int = WIDTH) -> str:
    """Return *title* between two lines of *rule*."""
    line = rule * width
    return f"\n{line}\n  {title}\n{line}"


def header(title: str) -> str:
    return framed(title, "═")


def section(title: str) -> str:
    return framed(title, "─")


def banner(title: str) -> None:
    print(f"{C.BOLD}{framed(title, '=', 62)}{C.NC}\n")
