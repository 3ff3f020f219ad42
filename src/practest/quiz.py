import logging
import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from .bank import group_by_topic
from .exceptions import InvalidSampleCount
from .models import Question

logger = logging.getLogger(__name__)


def shuffle(questions: Sequence[Question], rng: Optional[random.Random] = None) -> List[Question]:
    """Returns a uniformly shuffled copy (Fisher-Yates via ``random.shuffle``)."""
    shuffled = list(questions)
    (rng or random).shuffle(shuffled)
    return shuffled


def _check_count(count: int, available: int) -> int:
    if count <= 0:
        raise InvalidSampleCount(f"Question count must be positive, got {count}")
    if count > available:
        logger.debug(f"Requested {count} questions, only {available} available")
    return min(count, available)


# --- Strategy Pattern: Question Selection ---
class SelectionStrategy(ABC):
    """Abstract Base Class for the ways a test set is drawn from the bank."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    @abstractmethod
    def select(self, questions: Sequence[Question], count: int) -> List[Question]:
        pass


class RandomSelection(SelectionStrategy):
    """Draws ``count`` questions without replacement from the whole bank."""

    def select(self, questions: Sequence[Question], count: int) -> List[Question]:
        take = _check_count(count, len(questions))
        return shuffle(questions, self.rng)[:take]


class BalancedSelection(SelectionStrategy):
    """Draws roughly the same number of questions from every topic.

    Each topic contributes up to ``count // topic_count`` questions. Slots
    left over by the rounding, or by topics that are too small, are filled
    from the whole bank. The result is shuffled once more so questions are
    not presented grouped by topic.
    """

    def select(self, questions: Sequence[Question], count: int) -> List[Question]:
        target = _check_count(count, len(questions))

        by_topic = group_by_topic(questions)
        if not by_topic:
            return []

        per_topic = count // len(by_topic)

        # Keyed by id(): two questions with identical content are still distinct.
        selected: Dict[int, Question] = {}
        for topic_questions in by_topic.values():
            for q in shuffle(topic_questions, self.rng)[:per_topic]:
                selected[id(q)] = q

        for q in shuffle(questions, self.rng):
            if len(selected) >= target:
                break
            selected.setdefault(id(q), q)

        return shuffle(list(selected.values()), self.rng)


class SelectionFactory:
    """Factory to select the appropriate strategy."""

    @staticmethod
    def create(balanced: bool, rng: Optional[random.Random] = None) -> SelectionStrategy:
        if balanced:
            return BalancedSelection(rng)
        return RandomSelection(rng)
