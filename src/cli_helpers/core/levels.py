"""Logging levels beyond the standard library's set."""

import logging

TRACE = 5
LOG_OFF = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")
