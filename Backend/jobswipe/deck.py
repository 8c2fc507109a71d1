# backend/jobswipe/deck.py

"""
Swipe-deck state for a client session.

A deck walks an ordered list of job ids with a cursor and records each
decision in one of three sets. Only those sets cross the persistence
boundary (``snapshot`` / ``restore``); the job list and the cursor are
rebuilt from a fresh server fetch, which already leaves out decided jobs.

Callers own their deck instance and pass it to whatever renders it.
"""

from typing import List, Optional, Sequence, Set

from pydantic import BaseModel, Field

from jobswipe.models.swipe import SwipeDirection


class DeckSnapshot(BaseModel):
    """The persisted subset of a deck."""
    liked: List[str] = Field(default_factory=list)
    passed: List[str] = Field(default_factory=list)
    super_liked: List[str] = Field(default_factory=list)


class SwipeDeck:
    def __init__(self, job_ids: Optional[Sequence[str]] = None):
        self.jobs: List[str] = list(job_ids or [])
        self.index = 0
        self.liked: Set[str] = set()
        self.passed: Set[str] = set()
        self.super_liked: Set[str] = set()

    @property
    def current(self) -> Optional[str]:
        """The job on top of the deck, or None once every card is decided."""
        if self.index < len(self.jobs):
            return self.jobs[self.index]
        return None

    @property
    def remaining(self) -> int:
        return max(len(self.jobs) - self.index, 0)

    def add_jobs(self, job_ids: Sequence[str]) -> None:
        """Appends a further page of jobs behind the current ones."""
        self.jobs.extend(job_ids)

    def swipe(self, direction) -> Optional[str]:
        """
        Classifies the current job and advances. A super-like also counts as
        liked. Returns the job id, or None when the deck is exhausted.
        """
        job_id = self.current
        if job_id is None:
            return None

        direction = SwipeDirection.parse(direction)
        if direction is SwipeDirection.PASS:
            self.passed.add(job_id)
        elif direction is SwipeDirection.INTERESTED:
            self.liked.add(job_id)
        else:
            self.super_liked.add(job_id)
            self.liked.add(job_id)

        self.index += 1
        return job_id

    def undo(self) -> Optional[str]:
        """
        Steps back one card and forgets its decision. Repeated calls keep
        walking back; at the first card this does nothing.
        """
        if self.index == 0:
            return None

        self.index -= 1
        job_id = self.jobs[self.index]
        self.liked.discard(job_id)
        self.passed.discard(job_id)
        self.super_liked.discard(job_id)
        return job_id

    def reset(self) -> None:
        """Forgets every decision and goes back to the first card."""
        self.index = 0
        self.liked.clear()
        self.passed.clear()
        self.super_liked.clear()

    def decided(self) -> Set[str]:
        return self.liked | self.passed | self.super_liked

    def snapshot(self) -> DeckSnapshot:
        return DeckSnapshot(
            liked=sorted(self.liked),
            passed=sorted(self.passed),
            super_liked=sorted(self.super_liked),
        )

    @classmethod
    def restore(cls, snapshot: DeckSnapshot, job_ids: Optional[Sequence[str]] = None) -> "SwipeDeck":
        """Rebuilds a deck from persisted decisions and a freshly fetched job list."""
        deck = cls(job_ids)
        deck.liked = set(snapshot.liked)
        deck.passed = set(snapshot.passed)
        deck.super_liked = set(snapshot.super_liked)
        return deck
