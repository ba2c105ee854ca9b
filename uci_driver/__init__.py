"""
uci_driver

A synchronous client for chess engines that speak the Universal Chess
Interface (UCI) over stdin/stdout.

## Architecture

1. **transport**: Pipes to the engine subprocess
   - ProcessChannel: write raw text, read one line at a time
   - Watchdog: optional read deadline that kills a hung engine

2. **protocol**: UCI on top of the pipes
   - CommandProtocol: fire-and-forget sends, isready/readyok barrier,
     bestmove extraction
   - Formatting of setoption / position / go commands

3. **engine**: The client callers use
   - Engine: handshake, options, positions, searches, raw commands

4. **config** and **errors**: SearchBudget / EngineConfig, and the
   EngineError hierarchy

## Quick Start

```python
from uci_driver import Engine

with Engine("stockfish") as engine:
    engine.set_option("Skill Level", 5)
    engine.make_moves(["e2e4", "e7e5"])
    print(engine.movetime(200).bestmove())
```

From the shell:

```bash
python -m uci_driver stockfish --moves e2e4 e7e5 --depth 12
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from uci_driver.config import EngineConfig, SearchBudget
from uci_driver.engine import Engine, EngineState
from uci_driver.errors import (
    EngineError,
    EngineSpawnError,
    EngineStateError,
    EngineTimeout,
    ProcessExited,
    ProtocolError,
    TransportError,
    UnrecognizedOption,
)
from uci_driver.protocol import CommandProtocol
from uci_driver.transport import ProcessChannel

__all__ = [
    'Engine',
    'EngineState',
    'EngineConfig',
    'SearchBudget',
    'CommandProtocol',
    'ProcessChannel',
    'EngineError',
    'EngineSpawnError',
    'EngineStateError',
    'EngineTimeout',
    'ProcessExited',
    'ProtocolError',
    'TransportError',
    'UnrecognizedOption',
]
