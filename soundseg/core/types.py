"""
Type definitions for the SoundSeg core module.
Provides type aliases for type safety and better IDE support.
"""
from typing import Sequence, Union
import numpy as np
from numpy.typing import NDArray

# Sample data types
SAMPLE_DTYPE = np.int16
SampleArray = NDArray[np.int16]     # Shape: (samples,)
SampleLike = Union[SampleArray, Sequence[int]]

# Correlation sums are accumulated as doubles
CorrelationArray = NDArray[np.float64]

# Inclusive (start, end) sample indices of one identified occurrence
MatchSpan = tuple[int, int]
