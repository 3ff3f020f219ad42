import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from .history import HistoryLedger
from .models import Question, Result
from .session import SessionState

logger = logging.getLogger(__name__)


def incorrect_questions(
    questions: Sequence[Question], answers: Sequence[Optional[int]]
) -> List[Question]:
    """Questions whose answer is wrong or missing, in test order."""
    return [q for q, answer in zip(questions, answers) if not q.is_correct(answer)]


def score(session: SessionState) -> Result:
    wrong = incorrect_questions(session.test, session.answers)
    return Result(
        score=session.total - len(wrong),
        total=session.total,
        incorrect_count=len(wrong),
        timestamp=datetime.now(),
        questions=tuple(q.model_copy(deep=True) for q in session.test),
        answers=tuple(session.answers),
    )


class Scorer:
    """Scores submitted sessions and records them in the ledger."""

    def __init__(self, ledger: HistoryLedger):
        self.ledger = ledger

    def record(self, session: SessionState) -> Tuple[int, Result]:
        """Scores ``session`` and returns its ledger index with the result."""
        result = score(session)
        index = self.ledger.append(result)
        logger.info(
            f"Session {index + 1} submitted: {result.score}/{result.total} "
            f"({result.incorrect_count} incorrect)"
        )
        return index, result

    def submit(self, session: SessionState) -> Result:
        return self.record(session)[1]
