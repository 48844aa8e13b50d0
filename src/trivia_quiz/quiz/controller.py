"""Single owner of the quiz session state."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from . import state as transitions
from .formatter import Question
from .report import QuizReport, build_report, compute_score
from .state import DEFAULT_DURATION_SECONDS, Phase, SessionError, SessionState
from .timer import SessionTimer

StateListener = Callable[[SessionState, SessionState], None]


class QuizController:
    """Apply user actions and timer ticks to the session state.

    Every change replaces the state object and is announced to listeners as
    ``(previous, current)``. Entering the quiz phase starts the timer; leaving
    it stops the timer.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        *,
        duration_seconds: int = DEFAULT_DURATION_SECONDS,
        timer: Optional[SessionTimer] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._questions = tuple(questions)
        self._state = transitions.initial_state(
            len(self._questions), duration_seconds=duration_seconds
        )
        self._timer = timer if timer is not None else SessionTimer()
        self._timer.bind(self.tick)
        self._logger = logger or logging.getLogger("trivia_quiz.quiz")
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def timer(self) -> SessionTimer:
        return self._timer

    @property
    def current_question(self) -> Optional[Question]:
        if not self._questions:
            return None
        return self._questions[self._state.current_index]

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # Actions

    def edit_email(self, email: str) -> SessionState:
        return self._apply(transitions.edit_email(self._state, email))

    def begin_quiz(self) -> SessionState:
        updated = self._apply(transitions.begin_quiz(self._state))
        if updated.email_error:
            self._logger.info(
                "Rejected email address", extra={"event": "email_rejected"}
            )
        return updated

    def select_answer(self, option: str) -> SessionState:
        question = self.current_question
        if self._state.phase is Phase.QUIZ and (
            question is None or option not in question.options
        ):
            raise SessionError(f"'{option}' is not an option for this question.")
        return self._apply(transitions.select_answer(self._state, option))

    def navigate(self, index: int) -> SessionState:
        return self._apply(transitions.navigate(self._state, index))

    def next_question(self) -> SessionState:
        return self._apply(transitions.next_question(self._state))

    def submit(self) -> SessionState:
        return self._apply(transitions.submit(self._state))

    def tick(self) -> SessionState:
        return self._apply(transitions.tick(self._state))

    def poll_timer(self) -> int:
        return self._timer.poll()

    # Derived values

    def score(self) -> int:
        return compute_score(self._state.answers, self._questions)

    def report(self) -> QuizReport:
        return build_report(self._state, self._questions)

    def _apply(self, updated: SessionState) -> SessionState:
        previous = self._state
        if updated is previous:
            return previous
        self._state = updated
        if updated.phase is not previous.phase:
            self._phase_changed(previous, updated)
        for listener in list(self._listeners):
            listener(previous, updated)
        return updated

    def _phase_changed(
        self, previous: SessionState, current: SessionState
    ) -> None:
        if current.phase is Phase.QUIZ:
            self._timer.start()
        elif previous.phase is Phase.QUIZ:
            self._timer.stop()

        extra = {
            "event": "phase_change",
            "previous_phase": previous.phase.value,
            "phase": current.phase.value,
            "seconds_remaining": current.seconds_remaining,
            "question_count": current.question_count,
        }
        if current.phase is Phase.REPORT:
            extra["ended_by"] = current.ended_by.value if current.ended_by else None
            extra["answered"] = current.answered_count
            extra["score"] = compute_score(current.answers, self._questions)
        self._logger.info(
            "Quiz phase %s -> %s",
            previous.phase.value,
            current.phase.value,
            extra=extra,
        )
