"""Rich renderables for the start, quiz and report views.

Everything here is a pure function of the session state (and the question
list); nothing is cached between calls. Both front ends reuse these: the
console session prints them directly and the Textual app places them inside
``Static`` widgets.
"""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..formatter import Question
from ..report import QuizReport, build_report
from ..state import EndReason, Phase, QuestionStatus, SessionState, question_status
from ..timer import format_clock

OVERVIEW_COLUMNS = 5

STATUS_STYLES = {
    QuestionStatus.CURRENT: "bold white on blue",
    QuestionStatus.ANSWERED: "bold white on green",
    QuestionStatus.VISITED: "black on yellow",
    QuestionStatus.UNVISITED: "dim",
}

LOADING_TEXT = "Preparing your quiz..."


def render_view(
    state: SessionState, questions: Sequence[Question]
) -> RenderableType:
    if state.phase is Phase.QUIZ:
        return render_quiz(state, questions)
    if state.phase is Phase.REPORT:
        return render_report(build_report(state, questions))
    return render_start(state)


def render_start(state: SessionState) -> RenderableType:
    body = Text()
    body.append("Welcome to the Quiz!\n", style="bold")
    body.append(
        f"Test your knowledge with these {state.question_count} questions.\n"
    )
    body.append(
        f"You will have {format_clock(state.seconds_remaining)} to finish.\n\n",
        style="dim",
    )
    body.append("Enter your email address to start.")
    if state.email_error:
        body.append(f"\n{state.email_error}", style="red")
    return Panel(body, title="Trivia Quiz", border_style="cyan")


def render_clock(state: SessionState) -> Text:
    style = "bold red" if state.seconds_remaining < 60 else "bold"
    return Text(format_clock(state.seconds_remaining), style=style)


def render_overview(state: SessionState) -> Table:
    """Numbered grid of every question, coloured by its status."""

    grid = Table.grid(padding=(0, 1))
    for _ in range(OVERVIEW_COLUMNS):
        grid.add_column(justify="center")
    cells = [
        Text(
            f" {index + 1:>2} ",
            style=STATUS_STYLES[question_status(state, index)],
        )
        for index in range(state.question_count)
    ]
    for start in range(0, len(cells), OVERVIEW_COLUMNS):
        grid.add_row(*cells[start : start + OVERVIEW_COLUMNS])
    return grid


def question_title(state: SessionState, questions: Sequence[Question]) -> str:
    return f"Question {state.current_index + 1} of {len(questions)}"


def render_question_heading(
    state: SessionState, questions: Sequence[Question]
) -> Text:
    question = questions[state.current_index]
    heading = Text()
    if question.category:
        heading.append(f"{question.category}\n", style="dim")
    heading.append(question.text, style="bold")
    return heading


def render_question(
    state: SessionState, questions: Sequence[Question]
) -> RenderableType:
    question = questions[state.current_index]
    selected = state.answers[state.current_index]

    options = Table(show_header=False, box=box.SIMPLE, expand=True)
    options.add_column("#", justify="right", style="cyan")
    options.add_column("Option")
    for number, option in enumerate(question.options, start=1):
        row = Text("• " if option == selected else "  ")
        row.append(option, style="bold green" if option == selected else "")
        options.add_row(str(number), row)

    return Panel(
        Group(render_question_heading(state, questions), options),
        title=question_title(state, questions),
        border_style="blue",
    )


def render_quiz(
    state: SessionState, questions: Sequence[Question]
) -> RenderableType:
    if not questions:
        return Text(LOADING_TEXT, style="dim")
    header = Table.grid(expand=True)
    header.add_column()
    header.add_column(justify="right")
    header.add_row(
        Text("General Knowledge Quiz", style="bold magenta"),
        render_clock(state),
    )
    overview = Panel(
        render_overview(state),
        title="Questions Overview",
        border_style="dim",
        expand=False,
    )
    return Group(header, overview, render_question(state, questions))


def render_report(report: QuizReport) -> RenderableType:
    headline = Text.assemble(
        ("Your Final Score: ", "bold"),
        (str(report.score), "bold green"),
        f" / {report.total}",
    )
    if report.ended_by is EndReason.EXPIRED:
        headline.append("\nTime is up! Your answers were submitted.", style="yellow")
    else:
        headline.append(
            f"\nSubmitted with {format_clock(report.seconds_remaining)} left.",
            style="dim",
        )

    overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Email", report.email or "-")
    overview.add_row("Answered", f"{report.answered}/{report.total}")
    overview.add_row("Correct", str(report.score))
    overview.add_row("Accuracy", f"{report.accuracy * 100:.1f}%")

    per_category = Table(title="Per category", box=box.SIMPLE)
    per_category.add_column("Category")
    per_category.add_column("Asked", justify="right")
    per_category.add_column("Correct", justify="right")
    per_category.add_column("Accuracy", justify="right")
    for summary in report.per_category.values():
        per_category.add_row(
            summary.category or "(uncategorised)",
            str(summary.asked),
            str(summary.correct),
            f"{summary.accuracy * 100:.1f}%",
        )

    answers = Table(title="Review your answers", box=box.SIMPLE, expand=True)
    answers.add_column("#", justify="right")
    answers.add_column("Question", overflow="fold")
    answers.add_column("Your Answer")
    answers.add_column("Correct Answer", style="green")
    for result in report.results:
        if not result.attempted:
            yours = Text("Not Attempted", style="dim")
        else:
            yours = Text(
                result.selected or "",
                style="green" if result.is_correct else "red",
            )
        answers.add_row(
            str(result.index + 1),
            result.question,
            yours,
            result.correct_answer,
        )

    return Group(
        Panel(headline, title="Quiz Report", border_style="magenta"),
        overview,
        per_category,
        answers,
    )
