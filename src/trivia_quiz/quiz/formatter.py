"""Turn dataset records into display-ready questions."""

from __future__ import annotations

import html
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, TypeVar

from .dataset import QuestionKind, RawQuestion

T = TypeVar("T")


@dataclass(frozen=True)
class Question:
    """A decoded question with its options in presentation order."""

    text: str
    options: tuple[str, ...]
    correct_answer: str
    category: str = ""
    difficulty: str = ""
    kind: QuestionKind = QuestionKind.MULTIPLE_CHOICE


def decode_entities(text: str) -> str:
    return html.unescape(text)


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of ``items`` (Fisher-Yates).

    ``items`` itself is left untouched.
    """

    rng = rng if rng is not None else random.Random()
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def format_question(
    raw: RawQuestion, rng: Optional[random.Random] = None
) -> Question:
    correct = decode_entities(raw.correct_answer)
    incorrect = [decode_entities(answer) for answer in raw.incorrect_answers]
    return Question(
        text=decode_entities(raw.question),
        options=tuple(shuffle([*incorrect, correct], rng)),
        correct_answer=correct,
        category=decode_entities(raw.category),
        difficulty=raw.difficulty,
        kind=raw.kind,
    )


def format_questions(
    records: Iterable[RawQuestion], rng: Optional[random.Random] = None
) -> List[Question]:
    """Format ``records`` in source order, sharing one random source."""

    rng = rng if rng is not None else random.Random()
    return [format_question(record, rng) for record in records]
