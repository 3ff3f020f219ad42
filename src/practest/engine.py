import logging
import random
import threading
from typing import List, Optional, Union

from .bank import QuestionBank
from .exceptions import BankNotLoaded, NoActiveSession, NoResultAvailable
from .history import HistoryLedger
from .models import HistorySummary, Progress, Question, QuestionView, Result, ReviewItem, ReviewMode
from .quiz import SelectionFactory
from .review import review_result
from .scoring import Scorer, incorrect_questions
from .session import SessionState

logger = logging.getLogger(__name__)


class QuizEngine:
    """Owns the bank, the history and the session in progress.

    One engine is built per application run and every operation of the quiz
    goes through it. It returns plain models and never renders anything.
    Operations hold ``self._lock`` for their whole duration, since the web
    layer may call them from several worker threads.
    """

    def __init__(
        self,
        bank: QuestionBank,
        ledger: Optional[HistoryLedger] = None,
        rng: Optional[random.Random] = None,
    ):
        if not len(bank):
            raise BankNotLoaded("Question bank is empty")
        self.bank = bank
        self.ledger = ledger if ledger is not None else HistoryLedger()
        self.scorer = Scorer(self.ledger)
        self.rng = rng
        self.session: Optional[SessionState] = None
        self.last_incorrect: Optional[List[Question]] = None
        self.last_index: Optional[int] = None
        self.viewed_index: Optional[int] = None
        self._lock = threading.RLock()

    # --- Test lifecycle ---
    def start_test(self, count: int, balanced: bool = True) -> SessionState:
        strategy = SelectionFactory.create(balanced, self.rng)
        with self._lock:
            questions = strategy.select(self.bank.questions, count)
            session = self.session = SessionState.start(questions)
        logger.info(
            f"Test started: {len(questions)} questions "
            f"[{'balanced' if balanced else 'random'}]"
        )
        return session

    def _active(self) -> SessionState:
        if self.session is None:
            raise NoActiveSession("No test in progress")
        return self.session

    def select_answer(self, option_index: int) -> None:
        with self._lock:
            self._active().select_answer(option_index)

    def next(self) -> None:
        with self._lock:
            self._active().next()

    def prev(self) -> None:
        with self._lock:
            self._active().prev()

    def can_go_next(self) -> bool:
        with self._lock:
            return self.session is not None and self.session.can_go_next()

    def can_go_prev(self) -> bool:
        with self._lock:
            return self.session is not None and self.session.can_go_prev()

    def current_view(self) -> Optional[QuestionView]:
        with self._lock:
            return self._active().view()

    def progress(self) -> Progress:
        with self._lock:
            return self._active().progress()

    def submit(self) -> Result:
        with self._lock:
            session = self._active()
            index, result = self.scorer.record(session)
            # Retry works from the questions actually shown, not the snapshot.
            self.last_incorrect = incorrect_questions(session.test, session.answers)
            self.last_index = index
            self.session = None
        return result

    def retry_incorrect(self) -> SessionState:
        with self._lock:
            if self.last_incorrect is None:
                raise NoResultAvailable("No submitted test to retry")
            session = self.session = SessionState.start(self.last_incorrect)
        logger.info(f"Retrying {session.total} incorrect questions")
        return session

    def reset(self) -> None:
        with self._lock:
            self.session = None

    # --- Review & history ---
    def last_result(self) -> Result:
        with self._lock:
            if self.last_index is None:
                raise NoResultAvailable("No submitted test to review")
            return self.ledger.get(self.last_index)

    def review_current(self, mode: Union[ReviewMode, str] = ReviewMode.ALL) -> List[ReviewItem]:
        return review_result(self.last_result(), mode)

    def review_session(
        self, index: int, mode: Union[ReviewMode, str] = ReviewMode.ALL
    ) -> List[ReviewItem]:
        return review_result(self.get_session_detail(index), mode)

    def list_history(self) -> List[HistorySummary]:
        with self._lock:
            return self.ledger.summaries()

    def get_session_detail(self, index: int) -> Result:
        with self._lock:
            return self.ledger.get(index)

    def view_session(self, index: int) -> Result:
        with self._lock:
            result = self.ledger.get(index)
            self.viewed_index = index
            return result

    def review_viewed(self, mode: Union[ReviewMode, str] = ReviewMode.ALL) -> List[ReviewItem]:
        with self._lock:
            if self.viewed_index is None:
                raise NoResultAvailable("No session selected")
            return self.review_session(self.viewed_index, mode)
