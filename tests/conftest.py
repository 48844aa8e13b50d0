from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from fixtures import FakeClock, FakeScheduler, WorkspaceBuilder  # noqa: E402

# Ensure project root and src/ are importable when tests spawn subprocesses
ROOT = TESTS_DIR.parent
for extra in (ROOT, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from trivia_quiz.quiz.controller import QuizController  # noqa: E402
from trivia_quiz.quiz.dataset import load_dataset  # noqa: E402
from trivia_quiz.quiz.formatter import format_questions  # noqa: E402
from trivia_quiz.quiz.timer import SessionTimer  # noqa: E402


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def questions():
    """The built-in question bank with a fixed option shuffle."""

    return format_questions(load_dataset(), rng=random.Random(7))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def controller(questions, clock) -> QuizController:
    """A controller whose timer only moves when the test advances it."""

    return QuizController(questions, timer=SessionTimer(clock=clock))


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the real data home and config variables."""

    for key in (
        "TRIVIA_QUIZ_CONFIG",
        "TRIVIA_QUIZ_DURATION_SECONDS",
        "TRIVIA_QUIZ_SHUFFLE_SEED",
        "TRIVIA_QUIZ_DATASET",
        "TRIVIA_QUIZ_INTERFACE",
        "TRIVIA_QUIZ_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TRIVIA_QUIZ_DATA_HOME", str(tmp_path / "data-home"))
