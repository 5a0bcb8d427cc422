"""
Session abstraction for SoundSeg.
Encapsulates a set of named tracks and their teardown.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import os
from typing import Optional

from .config import TRACK_CONFIG
from .matching import identify
from .track import Track
from .wav import load_wav, save_wav
from ..utils.logger import logger


@dataclass
class Session:
    """
    Registry of the tracks being edited together.
    Track names are unique within a session.
    """
    name: str = TRACK_CONFIG.default_session_name
    tracks: dict[str, Track] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.tracks)

    def __contains__(self, name: str) -> bool:
        return name in self.tracks

    @property
    def track_names(self) -> list[str]:
        return list(self.tracks)

    def _unique_name(self, base: str) -> str:
        if base not in self.tracks:
            return base
        i = 2
        while f"{base} {i}" in self.tracks:
            i += 1
        return f"{base} {i}"

    def create_track(self, name: Optional[str] = None) -> Track:
        """Create an empty track; clashing names get a numeric suffix."""
        track = Track(self._unique_name(name or TRACK_CONFIG.default_track_name))
        self.tracks[track.name] = track
        return track

    def get_track(self, name: str) -> Optional[Track]:
        """Get track by name safely."""
        return self.tracks.get(name)

    def destroy_track(self, name: str) -> bool:
        """Destroy and forget a track. Fails while other tracks view it."""
        track = self.tracks.get(name)
        if track is None:
            return False
        if not track.destroy():
            return False
        del self.tracks[name]
        return True

    def load_track(self, path: str | os.PathLike, name: Optional[str] = None) -> Track:
        """Create a track holding the samples of a WAV file (empty if unreadable)."""
        track = self.create_track(name or os.path.splitext(os.path.basename(path))[0])
        track.write(load_wav(path), 0)
        logger.info(f"Loaded {len(track)} samples from {path} into {track.name!r}")
        return track

    def save_track(self, name: str, path: str | os.PathLike) -> bool:
        track = self.tracks.get(name)
        if track is None:
            return False
        return save_wav(path, track.read(0, len(track)))

    def identify(self, target_name: str, ad_name: str) -> str:
        """Find occurrences of one track's samples in another."""
        target, ad = self.tracks.get(target_name), self.tracks.get(ad_name)
        if target is None or ad is None:
            return ""
        return identify(target, ad)

    def close(self) -> None:
        """Tear down every track; no track may be used afterwards."""
        for track in self.tracks.values():
            track.destroy(force=True)
        self.tracks.clear()
        logger.debug(f"Session {self.name!r} closed")
