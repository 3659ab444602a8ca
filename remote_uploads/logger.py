"""
Logging setup. Use this as 'from .logger import log'
"""

import loguru

log = loguru.logger


def enable_logging():
    """
    Turn on the diagnostics emitted by this package. They are sent to
    whatever sinks loguru has configured (stderr by default).
    """

    loguru.logger.enable("remote_uploads")
    log.debug("Logging enabled.")
