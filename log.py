import logging

from config import LOG_FILE, LOG_FORMAT

logger = logging.getLogger("htn")


def configure_logging(filename=LOG_FILE, level=logging.INFO, filemode="w"):
    """Route planner output to a file, or to stderr when filename is None."""
    if filename:
        logging.basicConfig(filename=filename, filemode=filemode, level=level, format=LOG_FORMAT)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)
    return logger
