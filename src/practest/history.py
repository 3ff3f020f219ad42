from typing import List, Tuple

from .exceptions import HistoryIndexNotFound
from .models import HistorySummary, Result


class HistoryLedger:
    """Append-only, chronological record of submitted results.

    Indices are assigned on append and never change.
    """

    def __init__(self):
        self._results: List[Result] = []

    def append(self, result: Result) -> int:
        self._results.append(result)
        return len(self._results) - 1

    def all(self) -> Tuple[Result, ...]:
        return tuple(self._results)

    def get(self, index: int) -> Result:
        if not (0 <= index < len(self._results)):
            raise HistoryIndexNotFound(f"No session at index {index}")
        return self._results[index]

    def summaries(self) -> List[HistorySummary]:
        return [result.summary(i + 1) for i, result in enumerate(self._results)]

    def __len__(self) -> int:
        return len(self._results)
