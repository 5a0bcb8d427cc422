"""
SoundSeg - editable 16-bit PCM mono tracks with shared, non-destructive views.
"""
__version__ = "0.1.0"
