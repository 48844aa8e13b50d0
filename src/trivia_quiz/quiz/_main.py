import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from ..core import workspace as workspace_mod
from ..core.logging import configure_logger
from ..core.workspace import WorkspaceError
from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    InterfaceMode,
    LoadResult,
    QuizConfig,
    QuizConfigError,
    load_config,
    write_default_config,
)
from .controller import QuizController
from .dataset import DatasetError, load_dataset
from .formatter import Question, format_questions
from .session import run_quiz_session
from .view.app import TriviaApp


def _load(args: argparse.Namespace) -> LoadResult:
    overrides = ConfigOverrides(
        duration_seconds=getattr(args, "duration", None),
        shuffle_seed=args.seed,
        dataset_path=args.dataset,
        interface=getattr(args, "interface", None),
        log_level=getattr(args, "log_level", None),
        verbose=getattr(args, "verbose", None),
    )
    return load_config(
        config_path=args.config,
        overrides=overrides,
        workspace_path=args.workspace,
    )


def _load_questions(config: QuizConfig) -> List[Question]:
    records = load_dataset(config.dataset_path)
    return format_questions(records, rng=random.Random(config.shuffle_seed))


def _cmd_play(args: argparse.Namespace) -> int:
    try:
        load_result = _load(args)
    except QuizConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    config = load_result.config

    logger, log_path = configure_logger(
        "trivia_quiz.quiz",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=config.verbose,
    )
    logger.debug(
        "play command invoked",
        extra={
            "config_path": load_result.config_path,
            "interface": config.interface.value,
        },
    )

    try:
        questions = _load_questions(config)
    except DatasetError as exc:
        logger.error("Failed to load question bank", extra={"reason": str(exc)})
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    logger.info(
        "Loaded question bank",
        extra={
            "question_count": len(questions),
            "dataset": config.dataset_path or "built-in",
            "shuffle_seed": config.shuffle_seed,
        },
    )

    if config.interface is InterfaceMode.TUI:
        app = TriviaApp(
            questions,
            duration_seconds=config.duration_seconds,
            logger=logger,
        )
        app.run()
        return 0

    console = Console()
    controller = QuizController(
        questions,
        duration_seconds=config.duration_seconds,
        logger=logger,
    )
    outcome = run_quiz_session(
        controller,
        console,
        lambda: console.input("[bold cyan]> [/]"),
    )
    if outcome.exit_action == "empty":
        return 1
    console.print(f"[dim]Session log: {log_path}[/]")
    return 0


def _cmd_questions(args: argparse.Namespace) -> int:
    try:
        config = _load(args).config
        questions = _load_questions(config)
    except (QuizConfigError, DatasetError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2 if isinstance(exc, QuizConfigError) else 1
    if not questions:
        print("Question bank is empty.")
        return 1

    table = Table(title="Question bank", box=box.SIMPLE, expand=True)
    table.add_column("#", justify="right")
    table.add_column("Category")
    table.add_column("Difficulty")
    table.add_column("Question", overflow="fold")
    table.add_column("Options", overflow="fold")
    if args.answers:
        table.add_column("Answer", style="green")
    for number, question in enumerate(questions, start=1):
        row = [
            str(number),
            question.category,
            question.difficulty,
            question.text,
            "\n".join(question.options),
        ]
        if args.answers:
            row.append(question.correct_answer)
        table.add_row(*row)
    Console().print(table)
    return 0


def _cmd_config_init(args: argparse.Namespace) -> int:
    try:
        if args.path is not None:
            target = args.path.expanduser().absolute()
        else:
            layout = workspace_mod.ensure_workspace(path=args.workspace)
            target = layout.path_for("config") / CONFIG_FILENAME
        written = write_default_config(target, overwrite=args.force)
    except (WorkspaceError, QuizConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Wrote quiz config to {written}")
    return 0


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to trivia.toml (defaults to the workspace config directory)",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root (TRIVIA_QUIZ_DATA_HOME)",
    )
    parser.add_argument(
        "--dataset",
        type=Path,
        help="Question file (.json or .jsonl) instead of the built-in bank",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for shuffling answer options",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Timed 15-question trivia quiz",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sub = p.add_subparsers(dest="command", required=True)

    sp_play = sub.add_parser("play", help="Start a timed quiz session")
    _add_source_options(sp_play)
    sp_play.add_argument(
        "--tui",
        dest="interface",
        action="store_const",
        const=InterfaceMode.TUI,
        help="Use the full-screen Textual interface",
    )
    sp_play.add_argument(
        "--console",
        dest="interface",
        action="store_const",
        const=InterfaceMode.CONSOLE,
        help="Use the line-oriented console interface",
    )
    sp_play.add_argument(
        "--duration",
        type=int,
        help="Quiz length in seconds",
    )
    sp_play.add_argument("--log-level", help="Log level for the session log")
    sp_play.add_argument(
        "--verbose",
        action="store_const",
        const=True,
        help="Echo log records to stderr",
    )

    sp_q = sub.add_parser("questions", help="List the formatted question bank")
    _add_source_options(sp_q)
    sp_q.add_argument(
        "--answers",
        action="store_true",
        help="Include the correct answer for each question",
    )

    sp_cfg = sub.add_parser("config", help="Manage trivia.toml")
    cfg_sub = sp_cfg.add_subparsers(dest="action", required=True)
    sp_cfg_init = cfg_sub.add_parser(
        "init", help="Write the default trivia.toml template"
    )
    sp_cfg_init.add_argument(
        "--path",
        type=Path,
        help="Destination file (defaults to the workspace config directory)",
    )
    sp_cfg_init.add_argument("--workspace", type=Path)
    sp_cfg_init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config",
    )
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.command == "play":
        code = _cmd_play(args)
    elif args.command == "questions":
        code = _cmd_questions(args)
    elif args.command == "config" and args.action == "init":
        code = _cmd_config_init(args)
    else:  # pragma: no cover - fallback guard
        parser.print_help()
        code = 2
    raise SystemExit(code)
