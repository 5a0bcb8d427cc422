"""
Pytest configuration and fixtures for SoundSeg tests.
"""
import pytest
import numpy as np

from soundseg.core.track import Track
from soundseg.core.session import Session
from soundseg.core.config import WAV_CONFIG


@pytest.fixture
def sample_tone() -> np.ndarray:
    """Generate 0.1 seconds of a 440 Hz int16 tone."""
    sr = WAV_CONFIG.sample_rate
    t = np.arange(sr // 10) / sr
    return (np.sin(2 * np.pi * 440 * t) * 12000).astype(np.int16)


@pytest.fixture
def five_track() -> Track:
    """Track holding [1, 2, 3, 4, 5]."""
    return Track.from_samples([1, 2, 3, 4, 5], name="Five")


@pytest.fixture
def shared_pair() -> tuple[Track, Track]:
    """s=[10,20,30,40] with s[1:3] viewed inside d=[1,2] at position 1."""
    s = Track.from_samples([10, 20, 30, 40], name="Source")
    d = Track.from_samples([1, 2], name="Dest")
    assert d.insert(s, 1, 1, 2)
    return s, d


@pytest.fixture
def empty_session() -> Session:
    """Create an empty session."""
    return Session(name="Test Session")
