"""
Global constants for termprompt with minimal dependencies to avoid circular imports.
"""

DEFAULT_ROWS = 25
"""Terminal height used when neither options, state nor the output report one."""

DEFAULT_COLS = 80
"""Terminal width used when neither options, state nor the output report one."""

DEFAULT_ESCAPE_TIMEOUT = 0.05
"""Seconds to wait before a lone ESC byte is flushed as the escape key."""

STATUS_PENDING = "pending"
STATUS_COMPLETING = "completing"
STATUS_ANSWERED = "answered"
STATUS_CANCELLED = "cancelled"
