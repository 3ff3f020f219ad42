import asyncio
import logging
import os
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from .exceptions import BankLoadFailure
from .models import Question

logger = logging.getLogger(__name__)


def _present(value: Any) -> bool:
    return not (pd.api.types.is_scalar(value) and pd.isna(value))


def read_topic_file(file_path: str) -> List[Question]:
    """Reads one topic document (a JSON array of question records).

    A field missing from some records comes back from pandas as NaN; it is
    dropped so the model default applies.
    """
    df = pd.read_json(file_path, orient="records", dtype=False, convert_dates=False)
    return [
        Question.model_validate({k: v for k, v in record.items() if _present(v)})
        for record in df.to_dict("records")
    ]


def group_by_topic(questions: Iterable[Question]) -> Dict[str, List[Question]]:
    groups: Dict[str, List[Question]] = {}
    for q in questions:
        groups.setdefault(q.topic, []).append(q)
    return groups


# --- Service Layer: Question Bank ---
class QuestionBank:
    """Immutable pool of questions, loaded once at startup."""

    def __init__(self, questions: Iterable[Question]):
        self._questions: Tuple[Question, ...] = tuple(questions)

    @classmethod
    async def load(cls, directory: str, topics: Sequence[str]) -> "QuestionBank":
        """Loads every topic file concurrently.

        Either all topics load and a bank is returned, or BankLoadFailure is
        raised and nothing is kept. A partial bank would skew balanced
        sampling towards the topics that happened to load.
        """
        paths = [os.path.join(directory, f"{topic}.json") for topic in topics]
        outcomes = await asyncio.gather(
            *(asyncio.to_thread(read_topic_file, path) for path in paths),
            return_exceptions=True,
        )

        failures = [
            (topic, outcome)
            for topic, outcome in zip(topics, outcomes)
            if isinstance(outcome, BaseException)
        ]
        for topic, error in failures:
            logger.error(f"Failed to load topic {topic}: {error}")
        if failures:
            names = ", ".join(topic for topic, _ in failures)
            raise BankLoadFailure(f"Could not load topics: {names}") from failures[0][1]

        questions: List[Question] = []
        for topic, loaded in zip(topics, outcomes):
            logger.info(f"Loaded {len(loaded)} questions from {topic}")
            questions.extend(loaded)

        if not questions:
            raise BankLoadFailure(f"No questions found in {directory}")
        return cls(questions)

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    def by_topic(self) -> Dict[str, List[Question]]:
        return group_by_topic(self._questions)

    def get_topics(self) -> List[Dict[str, Any]]:
        topics = []
        for key, questions in self.by_topic().items():
            display_name = key.replace("_", " ").title()
            topics.append({"id": key, "name": display_name, "count": len(questions)})
        topics.sort(key=lambda x: x["name"])
        return topics
