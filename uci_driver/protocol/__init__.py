"""
UCI protocol layer: command formatting and output synchronization.
"""

from uci_driver.protocol.commands import (
    CommandProtocol,
    PROBE_COMMAND,
    PROBE_MARKER,
    RESULT_MARKER,
)
from uci_driver.protocol.formatting import (
    format_fen,
    format_go,
    format_move,
    format_option,
    format_position,
    format_value,
)

__all__ = [
    "CommandProtocol",
    "PROBE_COMMAND",
    "PROBE_MARKER",
    "RESULT_MARKER",
    "format_fen",
    "format_go",
    "format_move",
    "format_option",
    "format_position",
    "format_value",
]
