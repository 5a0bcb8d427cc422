"""
WAV container I/O for SoundSeg.

Files are written as canonical 44-byte-header mono 16-bit PCM at 8 kHz.
Failures never reach the caller: a failed load yields no samples and a
failed save leaves no file, with the reason logged.
"""
from __future__ import annotations
import os
from typing import Optional
import numpy as np
import soundfile as sf

from .config import WAV_CONFIG
from .types import SAMPLE_DTYPE, SampleArray, SampleLike
from ..utils.logger import logger


def load_wav(path: str | os.PathLike, out: Optional[SampleArray] = None) -> SampleArray:
    """
    Read the sample data of a WAV file as int16.

    Args:
        path: File to read
        out: Optional caller buffer; receives as many samples as fit

    Returns:
        The samples read (the filled prefix of `out` when given),
        empty when the file cannot be opened or decoded
    """
    try:
        data, samplerate = sf.read(path, dtype="int16", always_2d=False)
    except (sf.LibsndfileError, RuntimeError, OSError) as e:
        logger.warning(f"Failed to load {path}: {e}")
        return np.empty(0, dtype=SAMPLE_DTYPE) if out is None else out[:0]

    if data.ndim > 1:
        logger.warning(f"{path} has {data.shape[1]} channels; keeping the first")
        data = data[:, 0]
    if samplerate != WAV_CONFIG.sample_rate:
        logger.debug(f"{path} is {samplerate} Hz; samples loaded unchanged")

    if out is None:
        return np.ascontiguousarray(data, dtype=SAMPLE_DTYPE)
    count = min(len(out), len(data))
    out[:count] = data[:count]
    return out[:count]


def save_wav(path: str | os.PathLike, samples: SampleLike) -> bool:
    """
    Write samples as a mono 16-bit PCM WAV file.

    Args:
        path: Destination file (overwritten)
        samples: Sample values; coerced to int16

    Returns:
        True if the file was written, False otherwise
    """
    data = np.asarray(samples).astype(SAMPLE_DTYPE, copy=False).ravel()
    try:
        sf.write(
            path,
            data,
            WAV_CONFIG.sample_rate,
            subtype=WAV_CONFIG.subtype,
            format=WAV_CONFIG.format,
        )
    except (sf.LibsndfileError, RuntimeError, OSError) as e:
        logger.warning(f"Failed to save {path}: {e}")
        return False
    logger.debug(f"Saved {len(data)} samples to {path}")
    return True
