"""`trivia` command dispatcher."""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Mapping, Optional, Sequence

CommandHandler = Callable[[Sequence[str]], int]

_QUIZ_MODULE = "trivia_quiz.quiz._main"


@dataclass(frozen=True)
class CommandSpec:
    """A `trivia` subcommand and the module function that implements it."""

    name: str
    summary: str
    handler: Optional[CommandHandler] = None
    is_tui: bool = False


def _quiz_command(subcommand: str) -> CommandHandler:
    return lambda argv: _run_module_command(
        _QUIZ_MODULE, "main", "trivia", [subcommand, *argv]
    )


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="init",
        summary="Create the trivia-quiz workspace.",
        handler=lambda argv: _run_module_command(
            "trivia_quiz.workspace.cli", "main", "trivia init", argv
        ),
    ),
    CommandSpec(
        name="play",
        summary="Take the timed quiz (console, or --tui).",
        handler=_quiz_command("play"),
        is_tui=True,
    ),
    CommandSpec(
        name="questions",
        summary="List the formatted question bank.",
        handler=_quiz_command("questions"),
    ),
    CommandSpec(
        name="config",
        summary="Write the default trivia.toml.",
        handler=_quiz_command("config"),
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {
    spec.name: spec for spec in _COMMAND_SPECS
}


def format_command_table() -> str:
    width = max((len(spec.name) for spec in _COMMAND_SPECS), default=0)
    lines = ["Available commands:"]
    for spec in _COMMAND_SPECS:
        suffix = " (TUI)" if spec.is_tui else ""
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}{suffix}")
    return "\n".join(lines)


def format_usage() -> str:
    return "\n".join(
        [
            "Usage: trivia <command> [args...]",
            "Run `trivia list` for commands or `trivia help <name>` for details.",
            "",
            format_command_table(),
        ]
    )


def _print(text: str, *, err: bool = False) -> None:
    if text:
        (sys.stderr if err else sys.stdout).write(text + "\n")


def _handle_version() -> int:
    try:
        version = metadata.version("trivia-quiz")
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        _print(format_usage())
        return 0
    spec = COMMANDS.get(argv[0])
    if spec is None:
        _print(f"Unknown command '{argv[0]}'.", err=True)
        _print(format_command_table(), err=True)
        return 2
    _print(f"{spec.name}: {spec.summary}")
    _print(f"Run `trivia {spec.name} --help` for command options.")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    if not args:
        _print(format_usage())
        return 2

    head, *tail = args
    if head in ("-h", "--help"):
        _print(format_usage())
        return 0
    if head in ("-V", "--version", "version"):
        return _handle_version()
    if head == "list":
        _print(format_command_table())
        return 0
    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is not None and spec.handler is not None:
        return spec.handler(tail)
    _print(f"Unknown command '{head}'.", err=True)
    _print(format_command_table(), err=True)
    return 2


def _run_module_command(
    module_name: str,
    func_name: str,
    prog_name: str,
    argv: Sequence[str],
) -> int:
    target = getattr(import_module(module_name), func_name)
    return _invoke_main(target, prog_name, argv)


def _invoke_main(
    func: Callable[..., object], prog_name: str, argv: Sequence[str]
) -> int:
    """Call a module ``main`` with ``sys.argv[0]`` set to ``prog_name``.

    argparse derives its program name from ``sys.argv[0]``, so help output
    reads ``trivia play`` rather than the module path.
    """

    args = list(argv)
    old_argv = sys.argv
    sys.argv = [prog_name, *args]
    try:
        result = func(args) if _accepts_argv(func) else func()
    except SystemExit as exc:
        return _exit_code(exc.code)
    finally:
        sys.argv = old_argv
    return result if isinstance(result, int) else 0


def _accepts_argv(func: Callable[..., object]) -> bool:
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        param.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for param in parameters
    )


def _exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    _print(str(code), err=True)
    return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
