"""Line-oriented quiz session rendered with Rich.

The loop blocks on ``input_provider`` between renders, so the countdown is
driven by polling: every line read first turns the wall time that passed into
timer ticks. If that runs the clock out, the report is shown and the line is
discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .controller import QuizController
from .report import QuizReport
from .state import EndReason, Phase, SessionError
from .view.render import render_view

InputProvider = Callable[[], str]
ExitAction = Literal["submitted", "expired", "quit", "empty"]


@dataclass(frozen=True)
class SessionCommand:
    """Normalized command typed during the quiz phase."""

    type: Literal["select", "goto", "next", "submit", "quit"]
    index: Optional[int] = None


@dataclass(frozen=True)
class SessionOutcome:
    report: Optional[QuizReport]
    exit_action: ExitAction


def parse_session_command(raw: Optional[str]) -> Optional[SessionCommand]:
    """Parse quiz-phase input; numbers are 1-based on the way in."""

    if raw is None:
        return None
    text = raw.strip().lower()
    if not text:
        return None
    if text in {"n", "next"}:
        return SessionCommand("next")
    if text in {"s", "submit"}:
        return SessionCommand("submit")
    if text in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    target = None
    if text.startswith("#"):
        target = text[1:]
    else:
        head, _, tail = text.partition(" ")
        if head in {"g", "goto"}:
            target = tail
    if target is not None:
        target = target.strip()
        if not target.isdecimal():
            return None
        return SessionCommand("goto", int(target) - 1)
    if text.isdecimal():
        return SessionCommand("select", int(text) - 1)
    return None


def run_quiz_session(
    controller: QuizController,
    console: Console,
    input_provider: InputProvider,
) -> SessionOutcome:
    """Drive ``controller`` from console input until the report or a quit."""

    if not controller.questions:
        console.print(
            Panel(
                "Question bank is empty.",
                title="Trivia Quiz",
                border_style="yellow",
            )
        )
        return SessionOutcome(None, "empty")

    while True:
        state = controller.state
        console.print()
        console.print(render_view(state, controller.questions))
        if state.phase is Phase.REPORT:
            break
        _print_hint(
            console, state.phase, len(controller.current_question.options)
        )
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            return SessionOutcome(None, "quit")

        controller.poll_timer()
        if controller.state.phase is Phase.REPORT:
            console.print("[bold yellow]Time is up![/]")
            continue

        if state.phase is Phase.START:
            controller.edit_email(raw.strip())
            controller.begin_quiz()
            continue

        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            console.print("\n[bold yellow]Ending session without submission.[/]")
            return SessionOutcome(None, "quit")
        _apply_command(command, controller, console)

    final = controller.state
    action: ExitAction = (
        "expired" if final.ended_by is EndReason.EXPIRED else "submitted"
    )
    return SessionOutcome(controller.report(), action)


def _apply_command(
    command: SessionCommand,
    controller: QuizController,
    console: Console,
) -> None:
    if command.type == "next":
        if controller.state.is_last_question:
            console.print("[dim]This is the last question.[/]")
        controller.next_question()
    elif command.type == "submit":
        controller.submit()
    elif command.type == "goto" and command.index is not None:
        try:
            controller.navigate(command.index)
        except SessionError as exc:
            console.print(f"[red]{exc}[/red]")
    elif command.type == "select" and command.index is not None:
        options = controller.current_question.options
        if not 0 <= command.index < len(options):
            console.print(
                "[red]'%d' is not a valid option for this question.[/red]"
                % (command.index + 1)
            )
            return
        controller.select_answer(options[command.index])


def _print_hint(console: Console, phase: Phase, option_count: int) -> None:
    if phase is Phase.START:
        hint = "Type your email address and press Enter."
    else:
        hint = (
            f"Commands: 1-{option_count} (answer), n (next), g N (go to), "
            "submit, quit"
        )
    console.print(Text(hint, style="dim"))
