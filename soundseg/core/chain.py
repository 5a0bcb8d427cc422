"""
Singly linked segment chain backing a track.

Positions are logical sample indices. A position that falls exactly on
a segment boundary resolves to the later segment, so the same lookup
serves as an insertion gap and as the first sample of a read/write run.
"""
from __future__ import annotations
from typing import Iterator, NamedTuple, Optional

from .exceptions import OutOfRangeError
from .segment import Segment
from ..utils.logger import logger


class Location(NamedTuple):
    """Result of SegmentChain.locate."""
    segment: Segment
    offset: int                 # Offset of the position inside `segment`
    prev: Optional[Segment]     # Predecessor of `segment` (None at head)


class SegmentChain:
    """Ordered segments of one track plus the cached total length."""
    __slots__ = ('head', 'length')

    def __init__(self) -> None:
        self.head: Optional[Segment] = None
        self.length: int = 0

    def __iter__(self) -> Iterator[Segment]:
        seg = self.head
        while seg is not None:
            yield seg
            seg = seg.next

    def __len__(self) -> int:
        return self.length

    def walk(self) -> Iterator[tuple[int, Segment]]:
        """Yield (start position, segment) pairs."""
        pos = 0
        for seg in self:
            yield pos, seg
            pos += seg.length

    def tail(self) -> Optional[Segment]:
        last = None
        for seg in self:
            last = seg
        return last

    def locate(self, pos: int) -> Location:
        """Find the segment holding `pos` and the offset within it."""
        if pos < 0 or pos >= self.length:
            raise OutOfRangeError(f"Position {pos} outside chain of length {self.length}")

        prev = None
        prefix = 0
        seg = self.head
        while seg is not None:
            if prefix + seg.length > pos:
                return Location(seg, pos - prefix, prev)
            prefix += seg.length
            prev, seg = seg, seg.next

        # Cached length disagrees with the links
        raise OutOfRangeError(f"Position {pos} not reachable; chain is corrupt")

    # --- Structural edits ---

    def split(self, seg: Segment, k: int) -> tuple[Segment, Segment]:
        """
        Split `seg` into A (first k samples) and B (the rest), in place.

        A is `seg` itself, truncated. B addresses the tail of the same
        store, so views into that tail keep seeing the chain's writes.
        A split view keeps its single borrow: the borrow just gains a piece.
        """
        if not 0 < k < seg.length:
            raise ValueError(f"Split offset {k} must lie strictly inside a segment of {seg.length}")

        tail = Segment(seg.kind, seg.store, seg.start + k, seg.length - k,
                       borrow=seg.borrow, next=seg.next)
        if seg.borrow is not None:
            seg.borrow.pieces += 1
        seg.length = k
        seg.next = tail
        return seg, tail

    def join(self, a: Segment, b: Segment) -> bool:
        """Merge `b` into its predecessor `a` when they address one contiguous run."""
        if a.next is not b:
            return False
        if a.kind is not b.kind or a.store is not b.store or a.borrow is not b.borrow:
            return False
        if a.stop != b.start:
            return False

        a.length += b.length
        a.next = b.next
        b.next = None
        if a.borrow is not None:
            a.borrow.pieces -= 1
        logger.debug(f"Joined segments into run of {a.length}")
        return True

    def insert_after(self, prev: Optional[Segment], seg: Segment) -> None:
        """Link `seg` after `prev` (at head when prev is None). Length is not touched."""
        if prev is None:
            seg.next = self.head
            self.head = seg
        else:
            seg.next = prev.next
            prev.next = seg

    def append(self, seg: Segment) -> None:
        self.insert_after(self.tail(), seg)
        self.length += seg.length

    def cut(self, pos: int) -> Optional[Segment]:
        """
        Make `pos` a segment boundary and return the segment ending there.

        Returns None when pos is 0. pos == length returns the tail.
        """
        if pos <= 0:
            return None
        if pos >= self.length:
            return self.tail()

        loc = self.locate(pos)
        if loc.offset == 0:
            return loc.prev
        head, _ = self.split(loc.segment, loc.offset)
        return head

    def unlink_after(self, prev: Optional[Segment], count: int) -> list[Segment]:
        """
        Detach segments after `prev` until `count` samples are removed.
        The caller has already made both ends segment boundaries.
        """
        removed = []
        seg = self.head if prev is None else prev.next
        taken = 0
        while seg is not None and taken < count:
            removed.append(seg)
            taken += seg.length
            seg = seg.next

        if prev is None:
            self.head = seg
        else:
            prev.next = seg
        for r in removed:
            r.next = None
        self.length -= taken
        return removed

    def clear(self) -> list[Segment]:
        segments = list(self)
        self.head = None
        self.length = 0
        return segments
