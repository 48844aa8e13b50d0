"""Question bank records and loaders.

Records follow the Open Trivia DB response shape: a ``response_code`` and a
``results`` list whose items carry ``type``, ``difficulty``, ``category``,
``question``, ``correct_answer`` and ``incorrect_answers``. Text fields may
contain HTML entities; decoding happens in :mod:`trivia_quiz.quiz.formatter`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

__all__ = [
    "DatasetError",
    "QuestionKind",
    "RawQuestion",
    "STATIC_QUIZ_DATA",
    "load_dataset",
    "parse_records",
    "read_jsonl",
]


class DatasetError(RuntimeError):
    """Raised when a question file cannot be read or parsed."""


class QuestionKind(str, Enum):
    TRUE_FALSE = "boolean"
    MULTIPLE_CHOICE = "multiple"

    @property
    def label(self) -> str:
        if self is QuestionKind.TRUE_FALSE:
            return "true/false"
        return "multiple-choice"


@dataclass(frozen=True)
class RawQuestion:
    """A dataset record before entity decoding and option shuffling."""

    kind: QuestionKind
    difficulty: str
    category: str
    question: str
    correct_answer: str
    incorrect_answers: tuple[str, ...]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawQuestion":
        return cls(
            kind=QuestionKind(data["type"]),
            difficulty=str(data["difficulty"]),
            category=str(data["category"]),
            question=str(data["question"]),
            correct_answer=str(data["correct_answer"]),
            incorrect_answers=tuple(
                str(item) for item in data["incorrect_answers"]
            ),
        )


STATIC_QUIZ_DATA: Mapping[str, Any] = {
    "response_code": 0,
    "results": [
        {
            "type": "boolean",
            "difficulty": "easy",
            "category": "Entertainment: Video Games",
            "question": (
                "In &quot;Sonic Adventure&quot;, you are able to transform "
                "into Super Sonic at will after completing the main story."
            ),
            "correct_answer": "False",
            "incorrect_answers": ["True"],
        },
        {
            "type": "multiple",
            "difficulty": "medium",
            "category": "Entertainment: Video Games",
            "question": (
                "In which order do you need to hit some Deku Scrubs to open "
                "the first boss door in &quot;Ocarina of Time&quot;?"
            ),
            "correct_answer": "2, 3, 1",
            "incorrect_answers": ["1, 2, 3", "1, 3, 2", "2, 1, 3"],
        },
        {
            "type": "multiple",
            "difficulty": "easy",
            "category": "Entertainment: Film",
            "question": (
                "What superhero has been played in film by actors Michael "
                "Keaton, Val Kilmer, George Clooney and Christian Bale?"
            ),
            "correct_answer": "Batman",
            "incorrect_answers": ["Superman", "Iron Man", "Spiderman"],
        },
        {
            "type": "multiple",
            "difficulty": "medium",
            "category": "Entertainment: Video Games",
            "question": "Who composed the soundtrack for the game VVVVVV?",
            "correct_answer": "Magnus P&aring;lsson",
            "incorrect_answers": [
                "Terry Cavanagh",
                "Danny Baranowsky",
                "Joel Zimmerman",
            ],
        },
        {
            "type": "multiple",
            "difficulty": "medium",
            "category": "Entertainment: Film",
            "question": (
                "In what year was the movie &quot;Police Academy&quot; "
                "released?"
            ),
            "correct_answer": "1984",
            "incorrect_answers": ["1986", "1985", "1983"],
        },
        {
            "type": "boolean",
            "difficulty": "easy",
            "category": "Entertainment: Film",
            "question": (
                "Ewan McGregor did not know the name of the second prequel "
                "film of Star Wars during and after filming."
            ),
            "correct_answer": "True",
            "incorrect_answers": ["False"],
        },
        {
            "type": "multiple",
            "difficulty": "easy",
            "category": "Entertainment: Music",
            "question": (
                "Which classical composer wrote the "
                "&quot;Moonlight Sonata&quot;?"
            ),
            "correct_answer": "Ludvig Van Beethoven",
            "incorrect_answers": [
                "Chief Keef",
                "Wolfgang Amadeus Mozart",
                "Johannes Brahms",
            ],
        },
        {
            "type": "multiple",
            "difficulty": "hard",
            "category": "Entertainment: Board Games",
            "question": (
                "Which board game was first released on February 6th, 1935?"
            ),
            "correct_answer": "Monopoly",
            "incorrect_answers": ["Risk", "Clue", "Candy Land"],
        },
        {
            "type": "boolean",
            "difficulty": "easy",
            "category": "Entertainment: Video Games",
            "question": (
                "Big the Cat is a playable character in "
                "&quot;Sonic Generations&quot;."
            ),
            "correct_answer": "False",
            "incorrect_answers": ["True"],
        },
        {
            "type": "multiple",
            "difficulty": "hard",
            "category": "Entertainment: Video Games",
            "question": (
                "In &quot;Sonic the Hedgehog 3&quot; for the Sega Genesis, "
                "what is the color of the second Chaos Emerald you can get "
                "from Special Stages?"
            ),
            "correct_answer": "Orange",
            "incorrect_answers": ["Blue", "Green", "Magenta"],
        },
        {
            "type": "multiple",
            "difficulty": "medium",
            "category": "Entertainment: Video Games",
            "question": (
                "Which of these characters was NOT planned to be playable "
                "for Super Smash Bros. 64?"
            ),
            "correct_answer": "Peach",
            "incorrect_answers": ["Bowser", "Mewtwo", "King Dedede"],
        },
        {
            "type": "multiple",
            "difficulty": "medium",
            "category": "Entertainment: Video Games",
            "question": (
                "In &quot;PAYDAY 2&quot;, what weapon has the highest base "
                "weapon damage on a per-shot basis?"
            ),
            "correct_answer": "HRL-7",
            "incorrect_answers": [
                "Heavy Crossbow",
                "Thanatos .50 cal",
                "Broomstick Pistol",
            ],
        },
        {
            "type": "multiple",
            "difficulty": "easy",
            "category": "Entertainment: Film",
            "question": (
                "What was the first monster to appear alongside Godzilla?"
            ),
            "correct_answer": "Anguirus",
            "incorrect_answers": ["King Kong", "Mothra", "King Ghidora"],
        },
        {
            "type": "multiple",
            "difficulty": "easy",
            "category": "Sports",
            "question": (
                "What is the name of the &quot;tool&quot; used to hit the "
                "white ball in snooker or billiards?"
            ),
            "correct_answer": "Cue",
            "incorrect_answers": ["Racquet", "Bat", "Mallet"],
        },
        {
            "type": "multiple",
            "difficulty": "hard",
            "category": "History",
            "question": (
                "Which is the hull NO. of the Fletcher class destroyer "
                "Fletcher?"
            ),
            "correct_answer": "DD-445",
            "incorrect_answers": ["DD-992", "DD-444", "DD-446"],
        },
    ],
}


def parse_records(payload: Any) -> List[RawQuestion]:
    """Turn a decoded JSON payload into ``RawQuestion`` records.

    Accepts the Open Trivia DB envelope or a bare list of records. A non-zero
    ``response_code`` means the provider returned no usable results.
    """

    if isinstance(payload, Mapping):
        code = payload.get("response_code", 0)
        if code != 0:
            raise DatasetError(f"Question source returned response_code {code}")
        records = payload.get("results")
    else:
        records = payload
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise DatasetError("Question source must contain a list of results")
    try:
        return [RawQuestion.from_mapping(item) for item in records]
    except (KeyError, TypeError, ValueError) as exc:
        raise DatasetError(f"Malformed question record: {exc}") from exc


def read_jsonl(path: Path) -> List[dict]:
    data: List[dict] = []
    with Path(path).open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            data.append(json.loads(line))
    return data


def load_dataset(path: Optional[Path] = None) -> List[RawQuestion]:
    """Load the question bank from ``path`` or the built-in dataset."""

    if path is None:
        return parse_records(STATIC_QUIZ_DATA)
    try:
        if path.suffix.lower() == ".jsonl":
            payload: Any = read_jsonl(path)
        else:
            with path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
    except OSError as exc:
        raise DatasetError(f"Unable to read questions from {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Invalid JSON in {path}: {exc}") from exc
    return parse_records(payload)
