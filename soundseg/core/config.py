"""
Centralized configuration for SoundSeg.
All magic numbers and default settings in one place.
"""
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WavConfig:
    """WAV container settings (canonical mono PCM)."""
    sample_rate: int = 8000
    channels: int = 1
    subtype: str = "PCM_16"
    format: str = "WAV"
    header_size: int = 44  # RIFF + fmt + data chunk headers


@dataclass(frozen=True, slots=True)
class IdentifyConfig:
    """Ad identification settings."""
    threshold_ratio: float = 0.95  # Fraction of the ad's auto-correlation


@dataclass(frozen=True, slots=True)
class TrackConfig:
    """Track and session defaults."""
    default_track_name: str = "Track"
    default_session_name: str = "Untitled Session"


# Global config instances (immutable singletons)
WAV_CONFIG = WavConfig()
IDENTIFY_CONFIG = IdentifyConfig()
TRACK_CONFIG = TrackConfig()
