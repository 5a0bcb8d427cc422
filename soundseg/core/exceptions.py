"""Custom exceptions for SoundSeg.

This module defines the exception hierarchy for rejected track edits.
Track methods that edit structure catch these and report a boolean
result; the chain and the lower layers raise them directly.
"""


class SoundSegError(Exception):
    """Base exception for SoundSeg.

    All custom exceptions in this library inherit from this class,
    allowing callers to catch all SoundSeg-related errors with a
    single except clause.
    """


class OutOfRangeError(SoundSegError, IndexError):
    """A position lies outside the track where it must not.

    Raised when locating a position at or past the end of a chain,
    deleting from a position at or past the end of a track, or
    inserting from a source position at or past the end of the source.
    """


class LockedError(SoundSegError):
    """An owned segment is still borrowed by a view.

    Raised when a delete would shrink or free an owned segment whose
    child-reference count is greater than zero.
    """


class BusyError(SoundSegError):
    """A track cannot be destroyed while other tracks view its samples."""
