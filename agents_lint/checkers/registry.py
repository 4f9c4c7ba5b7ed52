"""
Checker registry and execution framework.

A CheckerRegistry is an explicit value: it is populated once at startup
(see agents_lint.checkers.build_default_registry) and then only read. Reads
and registration are guarded by a lock so several transcripts can be checked
concurrently from different threads.

run_all executes in id order, so results do not depend on registration order.
run_by_ids executes in the order the ids were requested.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence

from agents_lint.checkers.base import Checker, CheckResult, Violation
from agents_lint.exceptions import DuplicateCheckerError
from agents_lint.schemas.transcript.models import Transcript


class CheckerRegistry:
    """Keyed table of checker implementations."""

    def __init__(self, checkers: Iterable[Checker] = ()) -> None:
        self._lock = threading.Lock()
        self._checkers: dict[str, Checker] = {}
        for checker in checkers:
            self.register(checker)

    def register(self, checker: Checker) -> None:
        """
        Add a checker to the registry.

        Raises:
            DuplicateCheckerError: If a checker with the same id is already registered
        """
        with self._lock:
            if checker.id in self._checkers:
                raise DuplicateCheckerError(checker.id)
            self._checkers[checker.id] = checker

    def get(self, checker_id: str) -> Checker | None:
        """Return the checker with this id, or None if not registered."""
        with self._lock:
            return self._checkers.get(checker_id)

    def get_all(self) -> list[Checker]:
        """All registered checkers sorted by id."""
        with self._lock:
            return [self._checkers[checker_id] for checker_id in sorted(self._checkers)]

    def ids(self) -> list[str]:
        """Ids of all registered checkers, sorted."""
        with self._lock:
            return sorted(self._checkers)

    def run_all(self, transcript: Transcript) -> CheckResult:
        """Run every registered checker against a transcript."""
        return self.run(transcript, self.get_all())

    def run_by_ids(self, transcript: Transcript, checker_ids: Iterable[str]) -> CheckResult:
        """
        Run the checkers with the given ids, in the order given.

        Unknown ids are silently ignored.
        """
        checkers = [checker for checker in map(self.get, checker_ids) if checker is not None]
        return self.run(transcript, checkers)

    @staticmethod
    def run(transcript: Transcript, checkers: Sequence[Checker]) -> CheckResult:
        """Run the given checkers, concatenating violations in checker order."""
        violations: list[Violation] = []
        checkers_run: list[str] = []

        for checker in checkers:
            checkers_run.append(checker.id)
            violations.extend(checker.check(transcript))

        return CheckResult(violations=violations, checkers_run=checkers_run)

    def clear(self) -> None:
        """Remove all registered checkers. Intended for testing only."""
        with self._lock:
            self._checkers.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._checkers)

    def __contains__(self, checker_id: object) -> bool:
        with self._lock:
            return checker_id in self._checkers
