"""
Delay handler: GET /sleep/<seconds>.

Blocks the worker thread that owns the connection for a whole number of
seconds, then answers "Sleep time was N seconds". Only that connection
waits; every other connection has its own worker.

There is no cancellation and no upper bound. A sleeping worker keeps its
socket and thread until the delay is over.
"""

import re
import time
import logging
from typing import Callable

from ..http.request import Request
from ..http.response import Response, text, not_found


logger = logging.getLogger(__name__)

SLEEP_PATTERN = re.compile(r"/sleep/([+-]?[0-9]+)")


class SleepHandler:
    """
    Handler for GET /sleep... requests.

    Args:
        sleep: The blocking primitive (time.sleep; replaceable in tests).
    """

    def __init__(self, sleep: Callable[[float], None] = time.sleep):
        self._sleep = sleep

    def handle(self, request: Request) -> Response:
        match = SLEEP_PATTERN.match(request.path)
        if not match:
            return not_found()

        seconds = int(match.group(1))
        if seconds < 0:
            # time.sleep() rejects negative durations
            return not_found()

        try:
            self._sleep(seconds)
        except OverflowError:
            logger.debug(f"Sleep of {seconds}s is too large for this platform")
            return not_found()

        return text(f"Sleep time was {seconds} seconds")
