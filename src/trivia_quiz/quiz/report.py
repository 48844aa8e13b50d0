"""Scoring and the end-of-quiz report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from .formatter import Question
from .state import EndReason, SessionState


@dataclass(frozen=True)
class QuestionResult:
    """One row of the answer comparison."""

    index: int
    question: str
    category: str
    selected: Optional[str]
    correct_answer: str
    is_correct: bool

    @property
    def attempted(self) -> bool:
        return self.selected is not None


@dataclass(frozen=True)
class CategorySummary:
    category: str
    asked: int
    correct: int

    @property
    def accuracy(self) -> float:
        if self.asked == 0:
            return 0.0
        return self.correct / self.asked


@dataclass(frozen=True)
class QuizReport:
    email: str
    results: tuple[QuestionResult, ...]
    score: int
    total: int
    answered: int
    seconds_remaining: int
    ended_by: Optional[EndReason] = None
    per_category: Dict[str, CategorySummary] = field(default_factory=dict)

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return 0.0
        return self.score / self.total


def compute_score(
    answers: Sequence[Optional[str]], questions: Sequence[Question]
) -> int:
    """Count positions where the answer equals the question's correct answer."""

    return sum(
        1
        for answer, question in zip(answers, questions)
        if answer is not None and answer == question.correct_answer
    )


def build_report(
    state: SessionState, questions: Sequence[Question]
) -> QuizReport:
    results = tuple(
        QuestionResult(
            index=index,
            question=question.text,
            category=question.category,
            selected=selected,
            correct_answer=question.correct_answer,
            is_correct=selected is not None
            and selected == question.correct_answer,
        )
        for index, (selected, question) in enumerate(
            zip(state.answers, questions)
        )
    )
    return QuizReport(
        email=state.email,
        results=results,
        score=compute_score(state.answers, questions),
        total=len(questions),
        answered=sum(1 for result in results if result.attempted),
        seconds_remaining=state.seconds_remaining,
        ended_by=state.ended_by,
        per_category=_per_category(results),
    )


def _per_category(
    results: Sequence[QuestionResult],
) -> Dict[str, CategorySummary]:
    tally: Dict[str, list[int]] = {}
    for result in results:
        counts = tally.setdefault(result.category, [0, 0])
        counts[0] += 1
        if result.is_correct:
            counts[1] += 1
    return {
        category: CategorySummary(category, asked, correct)
        for category, (asked, correct) in tally.items()
    }
