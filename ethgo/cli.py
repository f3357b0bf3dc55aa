"""The ethgo command line interface."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .version import get_version

_HELP_FLAGS = ("-h", "-help", "--help")
_VERSION_FLAGS = ("-v", "-version", "--version")


@dataclass(frozen=True)
class _Command:
    synopsis: str
    help: str
    run: Callable[[list[str]], int]


def _run_version(args: list[str]) -> int:
    sys.stdout.write(get_version() + "\n")
    return 0


_COMMANDS = {
    "version": _Command(
        synopsis="Display the Ethgo version",
        help="Usage: ethgo version\n\n  Display the Ethgo version",
        run=_run_version,
    ),
}


def _help_text() -> str:
    width = max(len(name) for name in _COMMANDS)
    lines = [
        "Usage: ethgo [--version] [--help] <command> [<args>]",
        "",
        "Available commands are:",
    ]
    lines += [
        f"    {name.ljust(width)}    {_COMMANDS[name].synopsis}" for name in sorted(_COMMANDS)
    ]
    return "\n".join(lines) + "\n"


def run(args: Sequence[str]) -> int:
    """Run the command named by ``args`` and return its exit code."""
    args = list(args)
    if args and args[0] in _VERSION_FLAGS:
        args = ["version"]
    if not args:
        sys.stderr.write(_help_text())
        return 127
    if args[0] in _HELP_FLAGS:
        sys.stderr.write(_help_text())
        return 0

    command = _COMMANDS.get(args[0])
    if command is None:
        sys.stderr.write(_help_text())
        return 127

    rest = args[1:]
    if any(arg in _HELP_FLAGS for arg in rest):
        sys.stderr.write(command.help + "\n")
        return 0
    try:
        return command.run(rest)
    except Exception as exc:  # report any command failure as a CLI error
        sys.stderr.write(f"Error executing CLI: {exc}\n")
        return 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point of the ethgo command."""
    raise SystemExit(run(sys.argv[1:] if argv is None else argv))