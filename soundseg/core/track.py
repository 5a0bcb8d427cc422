"""
Editable 16-bit PCM mono track built on a segment chain.

Inserted material is never copied: the destination gains view segments
that address the source's sample stores directly, so a write through any
viewer lands in the one shared buffer and every other viewer sees it.
Owned segments that are still viewed refuse to be deleted.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .chain import SegmentChain
from .config import TRACK_CONFIG
from .exceptions import BusyError, LockedError, OutOfRangeError, SoundSegError
from .segment import Borrow, SampleStore, Segment, SegmentKind
from .types import SAMPLE_DTYPE, SampleArray, SampleLike
from ..utils.logger import logger


@dataclass(frozen=True, slots=True)
class SegmentInfo:
    """
    Read-only snapshot of one chain segment.

    For a view, `parent_offset` is the parent position of the view's first
    sample only. A later insert inside the borrowed run moves the parent's
    remaining samples, so `parent.read(parent_offset, length)` then differs
    from the view; map each sample with `Track.position_of` instead.
    """
    kind: SegmentKind
    position: int
    length: int
    parent: Optional["Track"] = None
    parent_offset: Optional[int] = None
    child_refs: int = 0


class Track:
    """
    A named handle on one segment chain.
    """
    __slots__ = ('name', 'chain', '_destroyed')

    def __init__(self, name: str = TRACK_CONFIG.default_track_name) -> None:
        self.name = name
        self.chain = SegmentChain()
        self._destroyed = False

    @classmethod
    def from_samples(cls, samples: SampleLike, name: str = TRACK_CONFIG.default_track_name) -> "Track":
        track = cls(name)
        track.write(samples, 0)
        return track

    def __len__(self) -> int:
        return self.chain.length

    def __repr__(self) -> str:
        return f"Track(name={self.name!r}, length={len(self)}, segments={self.segment_count})"

    @property
    def length(self) -> int:
        """Total number of samples in the track."""
        return self.chain.length

    @property
    def segment_count(self) -> int:
        return sum(1 for _ in self.chain)

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # --- Sample access ---

    def read(self, pos: int, length: int, out: Optional[SampleArray] = None) -> SampleArray:
        """
        Copy up to `length` samples starting at `pos`.

        The window is clamped to the end of the track; a window starting at
        or past the end reads nothing. When `out` is given the samples are
        stored in its prefix and that prefix is returned.
        """
        total = self.length
        if pos < 0:
            raise OutOfRangeError(f"Negative read position {pos}")
        if pos >= total or length <= 0:
            return np.empty(0, dtype=SAMPLE_DTYPE) if out is None else out[:0]

        length = min(length, total - pos)
        dest = np.empty(length, dtype=SAMPLE_DTYPE) if out is None else out[:length]
        if len(dest) < length:
            raise ValueError(f"Output buffer holds {len(dest)} samples, {length} needed")

        loc = self.chain.locate(pos)
        seg, offset = loc.segment, loc.offset
        written = 0
        while seg is not None and written < length:
            run = min(seg.length - offset, length - written)
            dest[written:written + run] = seg.samples[offset:offset + run]
            written += run
            seg, offset = seg.next, 0
        return dest

    def write(self, samples: SampleLike, pos: int, length: Optional[int] = None) -> None:
        """
        Overwrite samples from `pos`, appending whatever runs past the end.

        Writes into a view land in the viewed store and are therefore
        visible through the parent track and every other view of it.
        A `pos` beyond the end is treated as an append.
        """
        data = np.asarray(samples).astype(SAMPLE_DTYPE, copy=False).ravel()
        if length is not None:
            data = data[:max(length, 0)]
        count = len(data)
        if count == 0:
            return
        if pos < 0:
            raise OutOfRangeError(f"Negative write position {pos}")

        pos = min(pos, self.length)
        written = 0
        if pos < self.length:
            loc = self.chain.locate(pos)
            seg, offset = loc.segment, loc.offset
            while seg is not None and written < count:
                run = min(seg.length - offset, count - written)
                seg.samples[offset:offset + run] = data[written:written + run]
                written += run
                seg, offset = seg.next, 0

        if written < count:
            self._append(data[written:])

    def _append(self, data: SampleArray) -> None:
        store = SampleStore(np.array(data, dtype=SAMPLE_DTYPE), owner=self)
        self.chain.append(Segment.owned(store))
        logger.debug(f"{self.name}: appended {len(store)} samples")

    # --- Structural edits ---

    def insert(self, src: "Track", destpos: int, srcpos: int, length: int) -> bool:
        """
        Insert a shared view of `src[srcpos:srcpos+length]` at `destpos`.

        Returns False (track unchanged) when srcpos is not inside `src`.
        """
        try:
            self._insert(src, destpos, srcpos, length)
            return True
        except SoundSegError as e:
            logger.debug(f"{self.name}: insert rejected: {e}")
            return False

    def _insert(self, src: "Track", destpos: int, srcpos: int, length: int) -> None:
        if srcpos < 0 or srcpos >= src.length:
            raise OutOfRangeError(f"Source position {srcpos} outside {src.name!r} of length {src.length}")
        destpos = max(0, min(destpos, self.length))
        length = min(length, src.length - srcpos)
        if length <= 0:
            return

        # Everything is resolved and allocated before the chain changes,
        # so a self-insert reads the source layout as it was.
        views = [
            Segment.view(Borrow(store, start, stop, holder=self))
            for store, start, stop in src._resolve(srcpos, length)
        ]

        prev = self.chain.cut(destpos)
        for seg in views:
            self.chain.insert_after(prev, seg)
            prev = seg
        for seg in views:
            seg.borrow.acquire()
        self.chain.length += length
        logger.debug(
            f"{self.name}: inserted {length} samples of {src.name!r}@{srcpos} "
            f"at {destpos} as {len(views)} view(s)"
        )

    def _resolve(self, pos: int, length: int) -> list[tuple[SampleStore, int, int]]:
        """Map a window to (store, start, stop) runs, merging contiguous ones."""
        runs: list[tuple[SampleStore, int, int]] = []
        loc = self.chain.locate(pos)
        seg, offset = loc.segment, loc.offset
        remaining = length
        while seg is not None and remaining > 0:
            run = min(seg.length - offset, remaining)
            start = seg.start + offset
            if runs and runs[-1][0] is seg.store and runs[-1][2] == start:
                store, first, _ = runs[-1]
                runs[-1] = (store, first, start + run)
            else:
                runs.append((seg.store, start, start + run))
            remaining -= run
            seg, offset = seg.next, 0
        return runs

    def delete_range(self, pos: int, length: int) -> bool:
        """
        Remove `length` samples starting at `pos` (clamped to the end).

        Fails without touching the track when pos is past the end or when
        any owned segment in the window is still viewed. Views in the
        window are always removable.
        """
        try:
            self._delete(pos, length)
            return True
        except SoundSegError as e:
            logger.debug(f"{self.name}: delete rejected: {e}")
            return False

    def _delete(self, pos: int, length: int) -> None:
        if pos < 0 or pos >= self.length:
            raise OutOfRangeError(f"Delete position {pos} outside track of length {self.length}")
        length = min(length, self.length - pos)
        if length <= 0:
            return
        end = pos + length

        # Legality scan; nothing is modified until it passes
        for start, seg in self.chain.walk():
            if start >= end:
                break
            if start + seg.length <= pos:
                continue
            if seg.kind is SegmentKind.OWNED and seg.child_refs > 0:
                raise LockedError(
                    f"Samples {start}..{start + seg.length - 1} of {self.name!r} "
                    f"are viewed by {seg.child_refs} insert(s)"
                )

        self.chain.cut(end)
        before = self.chain.cut(pos)
        removed = self.chain.unlink_after(before, length)
        released = sum(1 for seg in removed if seg.borrow is not None and seg.borrow.release_piece())
        self._compact({seg.store for seg in removed if seg.kind is SegmentKind.OWNED})

        if before is not None and before.next is not None:
            self.chain.join(before, before.next)
        logger.debug(
            f"{self.name}: deleted {length} samples at {pos} "
            f"({len(removed)} segment(s), {released} borrow(s) released)"
        )

    def _compact(self, stores: set[SampleStore]) -> None:
        """
        Repack unborrowed stores so deleted samples are freed.

        The surviving owned segments of each store are copied, in chain
        order, into a fresh buffer that holds nothing else. Stores that
        are still borrowed keep their layout, since views address them
        by index.
        """
        for store in stores:
            if store.borrows or store.owner is not self:
                continue
            segs = [seg for seg in self.chain if seg.kind is SegmentKind.OWNED and seg.store is store]
            used = sum(seg.length for seg in segs)
            if not segs or used == len(store):
                continue
            try:
                packed = SampleStore(np.concatenate([seg.samples for seg in segs]), owner=self)
            except MemoryError:
                logger.warning(f"{self.name}: no memory to compact a store of {len(store)} samples")
                continue
            start = 0
            for seg in segs:
                seg.store, seg.start = packed, start
                start += seg.length
            logger.debug(f"{self.name}: compacted store from {len(store)} to {used} samples")

    def destroy(self, force: bool = False) -> bool:
        """
        Release every segment of the track.

        Refuses (returns False) while another track still views samples
        owned here. `force=True` is for whole-program teardown: the views
        elsewhere keep their buffers alive but lose their parent track.
        """
        try:
            self._check_not_borrowed()
        except BusyError as e:
            if not force:
                logger.info(f"{self.name}: destroy refused: {e}")
                return False
            logger.warning(f"{self.name}: forced destroy: {e}")

        for seg in self.chain.clear():
            if seg.borrow is not None:
                seg.borrow.release_piece()
            elif seg.store.owner is self:
                seg.store.owner = None
            seg.next = None
        self._destroyed = True
        logger.debug(f"{self.name}: destroyed")
        return True

    def _check_not_borrowed(self) -> None:
        for seg in self.chain:
            if seg.kind is SegmentKind.OWNED:
                outside = seg.store.refs(seg.start, seg.stop, exclude=self)
                if outside:
                    raise BusyError(f"{outside} view(s) on other tracks borrow {self.name!r}")

    # --- Introspection ---

    def child_refs(self, pos: int) -> int:
        """Child-reference count of the owned segment holding `pos` (0 for views)."""
        return self.chain.locate(pos).segment.child_refs

    def segments(self) -> list[SegmentInfo]:
        infos = []
        for pos, seg in self.chain.walk():
            parent = seg.parent_track
            infos.append(SegmentInfo(
                kind=seg.kind,
                position=pos,
                length=seg.length,
                parent=parent,
                parent_offset=parent.position_of(seg.store, seg.start) if parent else None,
                child_refs=seg.child_refs,
            ))
        return infos

    def position_of(self, store: SampleStore, index: int) -> Optional[int]:
        """Track position currently holding `store[index]` through an owned segment."""
        for pos, seg in self.chain.walk():
            if seg.kind is SegmentKind.OWNED and seg.store is store and seg.start <= index < seg.stop:
                return pos + index - seg.start
        return None


def insert(src_track: Track, dest_track: Track, destpos: int, srcpos: int, length: int) -> bool:
    """Insert a shared view of `src_track` into `dest_track`."""
    return dest_track.insert(src_track, destpos, srcpos, length)
