from .dataset import (
    DatasetError,
    QuestionKind,
    RawQuestion,
    load_dataset,
)
from .formatter import Question, format_question, format_questions, shuffle
from .timer import SessionTimer, format_clock
from .state import (
    EndReason,
    Phase,
    QuestionStatus,
    SessionError,
    SessionState,
    initial_state,
    question_status,
    validate_email,
)
from .report import QuizReport, build_report, compute_score
from .controller import QuizController
from .session import SessionOutcome, run_quiz_session
from .view.app import TriviaApp
from ._main import build_arg_parser

__all__ = [
    "DatasetError",
    "QuestionKind",
    "RawQuestion",
    "load_dataset",
    "Question",
    "format_question",
    "format_questions",
    "shuffle",
    "SessionTimer",
    "format_clock",
    "EndReason",
    "Phase",
    "QuestionStatus",
    "SessionError",
    "SessionState",
    "initial_state",
    "question_status",
    "validate_email",
    "QuizReport",
    "build_report",
    "compute_score",
    "QuizController",
    "SessionOutcome",
    "run_quiz_session",
    "TriviaApp",
    "build_arg_parser",
]
