"""
Serialized console output shared by all worker threads.

Each worker prints the raw request it received. Without a lock, two
workers printing at the same moment can interleave their text mid-line.
The lock covers the print call and nothing else: it is never held while
reading a socket, writing a response, or sleeping.
"""

import sys
import threading
from typing import Optional, TextIO


_print_lock = threading.Lock()


def echo(message: str, stream: Optional[TextIO] = None) -> None:
    """Print one message atomically with respect to other echo() calls."""
    stream = stream or sys.stdout
    with _print_lock:
        print(message, file=stream, flush=True)


def echo_request(raw: bytes, stream: Optional[TextIO] = None) -> None:
    """Print a received request as "Received Request:" plus its text."""
    text = raw.decode("utf-8", errors="replace")
    echo(f"Received Request:\n{text}", stream)
