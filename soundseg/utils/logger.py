import logging
import sys

LOGGER_NAME = "SoundSeg"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logger(name=LOGGER_NAME, console_level=logging.INFO):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    
    # Edits log at DEBUG; the console only shows refusals and I/O problems
    if not logger.handlers:
        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(console_level)
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
        
    return logger

def set_console_level(level):
    """Change how much of the SoundSeg log reaches stdout."""
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.setLevel(level)

logger = setup_logger()
