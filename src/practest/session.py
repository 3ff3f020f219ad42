from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel

from .exceptions import InvalidAnswer, NavigationOutOfBounds
from .models import Progress, Question, QuestionView


class SessionState(BaseModel):
    """One attempt at a test set.

    ``position`` moves with ``next``/``prev``; ``answers`` holds one slot per
    question, ``None`` until an option is selected. Callers check
    ``can_go_next``/``can_go_prev`` before navigating; stepping past either
    end raises NavigationOutOfBounds and leaves the state untouched.
    """

    test: Tuple[Question, ...]
    answers: List[Optional[int]]
    position: int = 0

    @classmethod
    def start(cls, questions: Sequence[Question]) -> "SessionState":
        return cls(test=tuple(questions), answers=[None] * len(questions))

    @property
    def total(self) -> int:
        return len(self.test)

    @property
    def current(self) -> Optional[Question]:
        if not self.test:
            return None
        return self.test[self.position]

    def can_go_next(self) -> bool:
        return self.position < self.total - 1

    def can_go_prev(self) -> bool:
        return self.position > 0

    def is_at_last(self) -> bool:
        return self.total > 0 and self.position == self.total - 1

    def select_answer(self, option_index: int) -> None:
        question = self.current
        if question is None:
            raise NavigationOutOfBounds("Session has no questions")
        if not (0 <= option_index < len(question.options)):
            raise InvalidAnswer(f"Invalid option {option_index}")
        self.answers[self.position] = option_index

    def next(self) -> None:
        if not self.can_go_next():
            raise NavigationOutOfBounds("Already at the last question")
        self.position += 1

    def prev(self) -> None:
        if not self.can_go_prev():
            raise NavigationOutOfBounds("Already at the first question")
        self.position -= 1

    def progress(self) -> Progress:
        answered = sum(1 for a in self.answers if a is not None)
        percent = (answered / self.total) * 100 if self.total else 0.0
        return Progress(answered=answered, total=self.total, percent=percent)

    def view(self) -> Optional[QuestionView]:
        question = self.current
        if question is None:
            return None
        return QuestionView(
            header=f"Question {self.position + 1} of {self.total}",
            position=self.position,
            total=self.total,
            topic=question.topic,
            question=question.question,
            options=list(question.options),
            selected=self.answers[self.position],
            can_go_prev=self.can_go_prev(),
            can_go_next=self.can_go_next(),
            can_submit=self.is_at_last(),
        )
