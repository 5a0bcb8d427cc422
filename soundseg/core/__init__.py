"""
SoundSeg Core Module

This module contains the track editing engine:
- Track: Segmented track with shared views, read/write/insert/delete
- SegmentChain: Position lookup and split/join of segments
- Session: Named track registry and teardown
- matching: Correlation-based ad search (identify)
- wav: WAV container load/save
"""
from .chain import Location, SegmentChain
from .config import (
    IDENTIFY_CONFIG,
    TRACK_CONFIG,
    WAV_CONFIG,
)
from .exceptions import (
    BusyError,
    LockedError,
    OutOfRangeError,
    SoundSegError,
)
from .matching import auto_correlation, cross_correlation, find_matches, identify
from .segment import Borrow, SampleStore, Segment, SegmentKind
from .session import Session
from .track import SegmentInfo, Track, insert
from .wav import load_wav, save_wav

__all__ = [
    # Main classes
    'Track',
    'Session',
    'SegmentChain',
    'Segment',
    'SegmentKind',
    'SegmentInfo',
    'SampleStore',
    'Borrow',
    'Location',
    # Operations
    'insert',
    'identify',
    'find_matches',
    'cross_correlation',
    'auto_correlation',
    'load_wav',
    'save_wav',
    # Errors
    'SoundSegError',
    'OutOfRangeError',
    'LockedError',
    'BusyError',
    # Config
    'IDENTIFY_CONFIG',
    'TRACK_CONFIG',
    'WAV_CONFIG',
]
