from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Models ---
class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str
    question: str
    options: Tuple[str, ...] = Field(min_length=2)
    correct_index: int = Field(alias="correctIndex")
    explanation: str = ""

    @model_validator(mode="after")
    def check_correct_index(self) -> "Question":
        if not (0 <= self.correct_index < len(self.options)):
            raise ValueError(
                f"correctIndex {self.correct_index} is not a valid option index"
            )
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]

    def option(self, index: Optional[int]) -> Optional[str]:
        if index is None or not (0 <= index < len(self.options)):
            return None
        return self.options[index]

    def is_correct(self, answer: Optional[int]) -> bool:
        return answer is not None and answer == self.correct_index


class ReviewMode(str, Enum):
    ALL = "all"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class HistorySummary(BaseModel):
    number: int
    score: int
    total: int
    incorrect_count: int
    timestamp: datetime


class Result(BaseModel):
    """Scored outcome of one submitted session.

    ``questions`` and ``answers`` are snapshots taken at submission time, so
    nothing done to later sessions can change a stored result.
    """

    model_config = ConfigDict(frozen=True)

    score: int
    total: int
    incorrect_count: int
    timestamp: datetime
    questions: Tuple[Question, ...]
    answers: Tuple[Optional[int], ...]

    @model_validator(mode="after")
    def check_totals(self) -> "Result":
        if self.score + self.incorrect_count != self.total:
            raise ValueError("score + incorrect_count must equal total")
        if len(self.questions) != self.total or len(self.answers) != self.total:
            raise ValueError("questions and answers must both have total entries")
        return self

    @property
    def percentage(self) -> int:
        return round((self.score / self.total) * 100) if self.total > 0 else 0

    def incorrect_questions(self) -> List[Question]:
        return [
            q for q, answer in zip(self.questions, self.answers)
            if not q.is_correct(answer)
        ]

    def summary(self, number: int) -> HistorySummary:
        return HistorySummary(
            number=number,
            score=self.score,
            total=self.total,
            incorrect_count=self.incorrect_count,
            timestamp=self.timestamp,
        )


class ReviewItem(BaseModel):
    index: int
    number: int
    topic: str
    question: str
    user_answer: str
    correct_answer: str
    explanation: str
    is_correct: bool


class Progress(BaseModel):
    answered: int
    total: int
    percent: float


class QuestionView(BaseModel):
    header: str
    position: int
    total: int
    topic: str
    question: str
    options: List[str]
    selected: Optional[int] = None
    can_go_prev: bool
    can_go_next: bool
    can_submit: bool
