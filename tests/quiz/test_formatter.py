from __future__ import annotations

import random
import re
from collections import Counter

from trivia_quiz.quiz import formatter
from trivia_quiz.quiz.dataset import QuestionKind, RawQuestion, load_dataset

ENTITY = re.compile(r"&[#a-zA-Z0-9]+;")


def test_format_questions_preserves_order_and_options():
    records = load_dataset()

    questions = formatter.format_questions(records, rng=random.Random(1))

    assert len(questions) == 15
    for record, question in zip(records, questions):
        assert len(question.options) == len(record.incorrect_answers) + 1
        assert question.options.count(question.correct_answer) == 1
        assert question.kind is record.kind


def test_format_questions_decodes_entities():
    questions = formatter.format_questions(load_dataset(), rng=random.Random(2))

    for question in questions:
        assert not ENTITY.search(question.text)
        assert not ENTITY.search(question.correct_answer)
        assert not any(ENTITY.search(option) for option in question.options)
    assert questions[0].text.startswith('In "Sonic Adventure"')
    assert questions[3].correct_answer == "Magnus Pålsson"
    assert "Magnus Pålsson" in questions[3].options


def test_decode_entities_handles_named_and_numeric():
    assert formatter.decode_entities("&quot;Hi&quot; &amp; &#039;bye&#039;") == (
        "\"Hi\" & 'bye'"
    )
    assert formatter.decode_entities("plain") == "plain"


def test_format_question_same_seed_same_order():
    raw = RawQuestion(
        kind=QuestionKind.MULTIPLE_CHOICE,
        difficulty="easy",
        category="Entertainment: Board Games",
        question="Which game?",
        correct_answer="Monopoly",
        incorrect_answers=("Risk", "Clue", "Candy Land"),
    )

    first = formatter.format_question(raw, random.Random(5))
    second = formatter.format_question(raw, random.Random(5))

    assert first == second
    assert sorted(first.options) == ["Candy Land", "Clue", "Monopoly", "Risk"]


def test_shuffle_returns_permutation_without_mutating_input():
    items = [1, 2, 3, 4, 5, 6]

    result = formatter.shuffle(items, random.Random(9))

    assert items == [1, 2, 3, 4, 5, 6]
    assert sorted(result) == items
    assert result is not items


def test_shuffle_handles_empty_and_single():
    assert formatter.shuffle([]) == []
    assert formatter.shuffle(["only"]) == ["only"]


def test_shuffle_is_roughly_uniform():
    rng = random.Random(1234)
    counts = Counter(formatter.shuffle("abc", rng)[0] for _ in range(6000))

    assert set(counts) == {"a", "b", "c"}
    for count in counts.values():
        assert 1800 <= count <= 2200


def test_shuffle_produces_every_ordering():
    rng = random.Random(42)
    orderings = Counter(
        tuple(formatter.shuffle([1, 2, 3], rng)) for _ in range(6000)
    )

    assert len(orderings) == 6
    for count in orderings.values():
        assert 800 <= count <= 1200
