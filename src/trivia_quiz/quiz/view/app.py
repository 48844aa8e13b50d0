"""Full-screen Textual front end for the quiz."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Button, Input, Static

from ..controller import QuizController
from ..formatter import Question
from ..state import (
    DEFAULT_DURATION_SECONDS,
    Phase,
    SessionError,
    SessionState,
    question_status,
)
from ..timer import SessionTimer
from .render import (
    LOADING_TEXT,
    question_title,
    render_clock,
    render_question_heading,
    render_report,
    render_start,
)


def _quiz_view_changed(previous: SessionState, current: SessionState) -> bool:
    return (
        previous.current_index != current.current_index
        or previous.answers != current.answers
        or previous.visited != current.visited
    )


class TriviaApp(App):
    CSS = """
#stage { padding: 1 2; }
#header { height: 3; }
#title { width: 1fr; content-align: left middle; }
#clock { width: auto; padding: 0 2; content-align: center middle; }
#overview { layout: grid; grid-size: 5; grid-gutter: 0 1; height: auto; width: 45; }
#overview Button { min-width: 7; }
#overview Button.status-current { background: $primary; }
#overview Button.status-answered { background: $success; }
#overview Button.status-visited { background: $warning; color: black; }
#options Button { width: 100%; }
#options Button.selected { background: $accent; color: black; }
#options { height: auto; }
"""
    BINDINGS = [
        ("n", "next_question", "Next"),
        ("s", "submit", "Submit"),
        *(
            Binding(str(number), f"select_option({number - 1})", show=False)
            for number in range(1, 10)
        ),
    ]

    def __init__(
        self,
        questions: Sequence[Question],
        *,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        logger: Optional[logging.Logger] = None,
        tick_interval: float = 1.0,
    ) -> None:
        super().__init__()
        self._tick_interval = tick_interval
        self.controller = QuizController(
            questions,
            duration_seconds=duration_seconds,
            timer=SessionTimer(schedule=self._schedule_ticks),
            logger=logger,
        )
        self.controller.subscribe(self._state_changed)

    def _schedule_ticks(self, callback):
        return self.set_interval(self._tick_interval, callback)

    def compose(self) -> ComposeResult:
        with Container(id="stage"):
            yield from self.stage_widgets()

    def stage_widgets(self) -> List[Widget]:
        """Widgets for the current phase; rebuilt whenever the phase changes."""

        state = self.controller.state
        if state.phase is Phase.START:
            return [
                Static(render_start(state), id="welcome"),
                Input(
                    value=state.email,
                    placeholder="Enter your email address",
                    id="email",
                ),
                Button("Start Quiz", id="start", variant="primary"),
            ]
        if state.phase is Phase.REPORT:
            return [
                VerticalScroll(
                    Static(render_report(self.controller.report()), id="report"),
                    id="report-scroll",
                )
            ]
        return self._quiz_widgets(state)

    def _quiz_widgets(self, state: SessionState) -> List[Widget]:
        questions = self.controller.questions
        if not questions:
            return [Static(LOADING_TEXT, id="loading")]
        question = questions[state.current_index]
        selected = state.answers[state.current_index]
        overview = [
            Button(
                str(index + 1),
                id=f"goto-{index}",
                classes=f"status-{question_status(state, index).value}",
            )
            for index in range(state.question_count)
        ]
        options = [
            Button(
                Text(option),
                id=f"option-{number}",
                classes="selected" if option == selected else "",
            )
            for number, option in enumerate(question.options)
        ]
        return [
            Horizontal(
                Static("General Knowledge Quiz", id="title"),
                Static(render_clock(state), id="clock"),
                Button("Submit", id="submit", variant="error"),
                id="header",
            ),
            Container(*overview, id="overview"),
            Static(question_title(state, questions), id="progress"),
            Static(render_question_heading(state, questions), id="question"),
            Container(*options, id="options"),
            Button(
                "Next Question",
                id="next",
                variant="primary",
                disabled=state.is_last_question,
            ),
        ]

    async def _rebuild_stage(self) -> None:
        try:
            stage = self.query_one("#stage", Container)
        except NoMatches:
            return
        await stage.remove_children()
        await stage.mount(*self.stage_widgets())
        if self.controller.state.phase is Phase.START:
            self.query_one("#email", Input).focus()

    def _state_changed(self, previous: SessionState, current: SessionState) -> None:
        if previous.phase is not current.phase or (
            current.phase is Phase.QUIZ and _quiz_view_changed(previous, current)
        ):
            self.call_later(self._rebuild_stage)
        elif current.phase is Phase.START:
            self._update_static("#welcome", render_start(current))
        elif current.seconds_remaining != previous.seconds_remaining:
            self._update_static("#clock", render_clock(current))

    def _update_static(self, selector: str, renderable) -> None:
        try:
            self.query_one(selector, Static).update(renderable)
        except NoMatches:
            return

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "email":
            self.controller.edit_email(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_begin()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = getattr(event.button, "id", "") or ""
        if bid == "start":
            self.action_begin()
        elif bid == "submit":
            self.action_submit()
        elif bid == "next":
            self.action_next_question()
        elif bid.startswith("goto-"):
            self.action_goto(int(bid.removeprefix("goto-")))
        elif bid.startswith("option-"):
            self.action_select_option(int(bid.removeprefix("option-")))

    def action_begin(self) -> None:
        self.controller.begin_quiz()

    def action_next_question(self) -> None:
        self.controller.next_question()

    def action_submit(self) -> None:
        self.controller.submit()

    def action_goto(self, index: int) -> None:
        try:
            self.controller.navigate(index)
        except SessionError:
            self.bell()

    def action_select_option(self, index: int) -> None:
        question = self.controller.current_question
        if self.controller.state.phase is not Phase.QUIZ or question is None:
            return
        if 0 <= index < len(question.options):
            self.controller.select_answer(question.options[index])
