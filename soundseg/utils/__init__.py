"""
SoundSeg Utilities Module

Utility functions and helpers:
- logger: Logging configuration
"""
from .logger import LOGGER_NAME, logger, set_console_level

__all__ = ['LOGGER_NAME', 'logger', 'set_console_level']
