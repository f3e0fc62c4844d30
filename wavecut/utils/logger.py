import logging
import os
import sys

LOGGER_NAME = "WaveCut"
LEVEL_ENV_VAR = "WAVECUT_LOG_LEVEL"


def setup_logger(level=None):
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "DEBUG").upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Console Handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)

    # Formatter
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    ch.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(ch)

    # librosa pulls in numba, which is chatty at DEBUG
    logging.getLogger("numba").setLevel(logging.WARNING)

    return logger

logger = setup_logger()
