from typing import List, Optional, Sequence, Union

from .models import Question, Result, ReviewItem, ReviewMode


def filter_review(
    questions: Sequence[Question],
    answers: Sequence[Optional[int]],
    mode: Union[ReviewMode, str] = ReviewMode.ALL,
) -> List[ReviewItem]:
    """Projects a scored session into review rows, in test order.

    ``mode`` keeps all rows, only the correct ones, or only the incorrect
    ones. An unanswered slot shows as ``"None"``.
    """
    mode = ReviewMode(mode)
    items = []
    for i, (q, answer) in enumerate(zip(questions, answers)):
        correct = q.is_correct(answer)
        if mode is ReviewMode.CORRECT and not correct:
            continue
        if mode is ReviewMode.INCORRECT and correct:
            continue

        user_answer = q.option(answer)
        items.append(
            ReviewItem(
                index=i,
                number=i + 1,
                topic=q.topic,
                question=q.question,
                user_answer=user_answer if user_answer is not None else "None",
                correct_answer=q.correct_option,
                explanation=q.explanation,
                is_correct=correct,
            )
        )
    return items


def review_result(result: Result, mode: Union[ReviewMode, str] = ReviewMode.ALL) -> List[ReviewItem]:
    return filter_review(result.questions, result.answers, mode)
