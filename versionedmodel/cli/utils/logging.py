import logging
import sys


logger = logging.getLogger("versionedmodel")

DEBUG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool):
    """
    Configures the package logger for the command line.

    Log records go to stderr so converted documents written to stdout stay
    parseable. Debug mode also shows the emitting module, which tells pipeline
    steps apart from converter steps.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(DEBUG_FORMAT if debug else "%(message)s")
    )

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    if not logger.hasHandlers():
        logger.addHandler(handler)
