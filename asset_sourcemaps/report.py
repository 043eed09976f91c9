"""Per-file outcomes and the aggregate report of a run."""
from __future__ import annotations

import enum
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional


class Status(str, enum.Enum):
    PROCESSED = "processed"
    REUSED = "reused"
    ALREADY_PROCESSED = "already processed"
    FAILED = "failed"


@dataclass
class FileOutcome:
    path: Path
    status: Status
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status is Status.FAILED

    @classmethod
    def failure(cls, path: Path, exc: BaseException) -> "FileOutcome":
        return cls(path=path, status=Status.FAILED, error=str(exc) or type(exc).__name__)


@dataclass
class RunReport:
    outcomes: List[FileOutcome] = field(default_factory=list)

    def extend(self, outcomes: Iterable[FileOutcome]) -> None:
        self.outcomes.extend(outcomes)

    @property
    def failures(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def ok(self) -> bool:
        return not self.failures

    def summarize(self) -> dict:
        counts = Counter(outcome.status for outcome in self.outcomes)
        summary = {status.name.lower(): counts.get(status, 0) for status in Status}
        summary["total"] = len(self.outcomes)
        return summary
