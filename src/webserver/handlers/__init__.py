"""
=============================================================================
HANDLERS MODULE
=============================================================================

A handler takes a parsed Request and returns a Response. It never writes
to the socket itself and never raises for bad input: malformed paths and
missing files come back as the not-found page.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ Type              │ Handler                                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │ Class Handler     │ StaticFileHandler  (base dir, confinement)      │
    │                   │ SleepHandler       (injectable sleep primitive) │
    ├─────────────────────────────────────────────────────────────────────┤
    │ Function Handler  │ handle_calc        (stateless)                  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .static import StaticFileHandler
from .calc import handle_calc, calculate, truncating_div
from .sleep import SleepHandler

__all__ = [
    "StaticFileHandler",
    "handle_calc",
    "calculate",
    "truncating_div",
    "SleepHandler",
]
