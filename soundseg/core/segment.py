"""
Segments and the sample stores behind them.

A SampleStore owns one contiguous int16 buffer. Segments never hold
samples themselves: both variants address a store range, and the tag
says whether the range belongs to the segment's own track (OWNED) or
was borrowed from a store by an insert (VIEW).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from .types import SampleArray

if TYPE_CHECKING:
    from .track import Track


class SegmentKind(Enum):
    """Segment variant tag."""
    OWNED = auto()
    VIEW = auto()


@dataclass(eq=False)
class SampleStore:
    """
    A contiguous run of samples owned by one track.
    Views on any track may borrow ranges of it through Borrow records.
    """
    samples: SampleArray
    owner: Optional["Track"] = None
    borrows: list["Borrow"] = field(default_factory=list, repr=False)

    def __len__(self) -> int:
        return len(self.samples)

    def refs(self, start: int, stop: int, exclude: Optional["Track"] = None) -> int:
        """Count live borrows overlapping [start, stop)."""
        return sum(
            1 for b in self.borrows
            if b.start < stop and start < b.stop and b.holder is not exclude
        )


@dataclass(eq=False, slots=True)
class Borrow:
    """
    One insert's claim on a store range.

    Every view segment cut from the same insert shares the record, so
    splitting a view never adds a reference and the claim is dropped
    only once its last piece is gone.
    """
    store: SampleStore
    start: int
    stop: int
    holder: "Track"
    pieces: int = 1

    def acquire(self) -> None:
        self.store.borrows.append(self)

    def release_piece(self) -> bool:
        """Drop one view piece. Returns True when the claim was released."""
        self.pieces -= 1
        if self.pieces > 0:
            return False
        self.store.borrows.remove(self)
        return True


@dataclass(eq=False, slots=True)
class Segment:
    """
    Element of a track's chain: `length` samples of `store` from `start`.
    """
    kind: SegmentKind
    store: SampleStore
    start: int
    length: int
    borrow: Optional[Borrow] = None
    next: Optional["Segment"] = field(default=None, repr=False)

    @classmethod
    def owned(cls, store: SampleStore, start: int = 0, length: Optional[int] = None) -> "Segment":
        if length is None:
            length = len(store) - start
        return cls(SegmentKind.OWNED, store, start, length)

    @classmethod
    def view(cls, borrow: Borrow) -> "Segment":
        return cls(SegmentKind.VIEW, borrow.store, borrow.start,
                   borrow.stop - borrow.start, borrow=borrow)

    @property
    def stop(self) -> int:
        return self.start + self.length

    @property
    def is_view(self) -> bool:
        return self.kind is SegmentKind.VIEW

    @property
    def samples(self) -> SampleArray:
        """Writable numpy view of this segment's samples in its store."""
        return self.store.samples[self.start:self.stop]

    @property
    def parent_track(self) -> Optional["Track"]:
        """Owner of the borrowed samples (views only)."""
        return self.store.owner if self.is_view else None

    @property
    def child_refs(self) -> int:
        """Number of outstanding views into this segment (owned only)."""
        if self.is_view:
            return 0
        return self.store.refs(self.start, self.stop)
