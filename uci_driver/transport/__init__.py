"""
Transport layer: pipes to the engine subprocess.
"""

from uci_driver.transport.channel import ProcessChannel
from uci_driver.transport.watchdog import Watchdog

__all__ = ["ProcessChannel", "Watchdog"]
