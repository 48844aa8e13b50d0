"""Quiz session state and its transitions.

``SessionState`` is immutable; every transition is a plain function that
returns a new state (or the same object when the action does not apply to the
current phase). The controller owns the current value and swaps it whole.

Phases run ``START -> QUIZ -> REPORT``. ``REPORT`` is terminal: once reached,
ticks, submits and answer edits are ignored, so whichever of the timer and a
manual submit arrives first decides how the quiz ended.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

DEFAULT_DURATION_SECONDS = 30 * 60
EMAIL_ERROR = "Please enter a valid email address."

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class SessionError(ValueError):
    """Raised for actions that reference a question or option that does not exist."""


class Phase(str, Enum):
    START = "start"
    QUIZ = "quiz"
    REPORT = "report"


class EndReason(str, Enum):
    SUBMITTED = "submitted"
    EXPIRED = "expired"


class QuestionStatus(str, Enum):
    CURRENT = "current"
    ANSWERED = "answered"
    VISITED = "visited"
    UNVISITED = "unvisited"


@dataclass(frozen=True)
class SessionState:
    question_count: int
    phase: Phase = Phase.START
    email: str = ""
    email_error: str = ""
    answers: tuple[Optional[str], ...] = ()
    current_index: int = 0
    visited: frozenset[int] = field(default_factory=lambda: frozenset({0}))
    seconds_remaining: int = DEFAULT_DURATION_SECONDS
    ended_by: Optional[EndReason] = None

    def __post_init__(self) -> None:
        if len(self.answers) != self.question_count:
            raise SessionError(
                f"Expected {self.question_count} answer slots, got {len(self.answers)}."
            )

    @property
    def answered_count(self) -> int:
        return sum(1 for answer in self.answers if answer is not None)

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= self.question_count - 1


def initial_state(
    question_count: int, *, duration_seconds: int = DEFAULT_DURATION_SECONDS
) -> SessionState:
    return SessionState(
        question_count=question_count,
        answers=(None,) * question_count,
        seconds_remaining=duration_seconds,
    )


def validate_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def edit_email(state: SessionState, email: str) -> SessionState:
    if state.phase is not Phase.START:
        return state
    return replace(state, email=email, email_error="")


def begin_quiz(state: SessionState) -> SessionState:
    if state.phase is not Phase.START:
        return state
    if not validate_email(state.email):
        return replace(state, email_error=EMAIL_ERROR)
    return replace(state, phase=Phase.QUIZ, email_error="")


def select_answer(state: SessionState, option: str) -> SessionState:
    if state.phase is not Phase.QUIZ:
        return state
    answers = list(state.answers)
    answers[state.current_index] = option
    return replace(state, answers=tuple(answers))


def navigate(state: SessionState, index: int) -> SessionState:
    if state.phase is not Phase.QUIZ:
        return state
    if not 0 <= index < state.question_count:
        raise SessionError(
            f"Question {index + 1} does not exist "
            f"(1-{state.question_count})."
        )
    return replace(state, current_index=index, visited=state.visited | {index})


def next_question(state: SessionState) -> SessionState:
    if state.phase is not Phase.QUIZ or state.is_last_question:
        return state
    return navigate(state, state.current_index + 1)


def submit(state: SessionState) -> SessionState:
    if state.phase is not Phase.QUIZ:
        return state
    return replace(state, phase=Phase.REPORT, ended_by=EndReason.SUBMITTED)


def tick(state: SessionState) -> SessionState:
    if state.phase is not Phase.QUIZ:
        return state
    remaining = max(state.seconds_remaining - 1, 0)
    if remaining == 0:
        return replace(
            state,
            seconds_remaining=0,
            phase=Phase.REPORT,
            ended_by=EndReason.EXPIRED,
        )
    return replace(state, seconds_remaining=remaining)


def is_attempted(state: SessionState, index: int) -> bool:
    return state.answers[index] is not None


def question_status(state: SessionState, index: int) -> QuestionStatus:
    """Overview colouring for ``index``; derived, never stored."""

    if index == state.current_index:
        return QuestionStatus.CURRENT
    if is_attempted(state, index):
        return QuestionStatus.ANSWERED
    if index in state.visited:
        return QuestionStatus.VISITED
    return QuestionStatus.UNVISITED
