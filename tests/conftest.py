import json
import random

import pytest

from practest.bank import QuestionBank
from practest.models import Question


def make_question(topic: str, n: int, correct_index: int = 0) -> Question:
    return Question(
        topic=topic,
        question=f"{topic} question {n}",
        options=("A", "B", "C", "D"),
        correct_index=correct_index,
        explanation=f"{topic} explanation {n}",
    )


def make_bank(topics, per_topic) -> QuestionBank:
    return QuestionBank(
        make_question(topic, n) for topic in topics for n in range(per_topic)
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def small_bank():
    """3 topics x 2 questions."""
    return make_bank(["rights", "history", "law"], 2)


@pytest.fixture
def uneven_bank():
    return QuestionBank(
        [make_question("history", n) for n in range(10)]
        + [make_question("symbols", n) for n in range(2)]
        + [make_question("law", n) for n in range(6)]
    )


@pytest.fixture
def questions_dir(tmp_path):
    topics = ["rights", "history", "law"]
    for topic in topics:
        records = [
            {
                "topic": topic,
                "question": f"{topic} question {n}",
                "options": ["yes", "no", "maybe"],
                "correctIndex": n % 3,
                "explanation": f"because {n}",
            }
            for n in range(3)
        ]
        (tmp_path / f"{topic}.json").write_text(json.dumps(records), encoding="utf-8")
    return tmp_path, topics
