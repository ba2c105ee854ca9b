"""
Engine Error Types

Every failure raised by uci_driver derives from EngineError, so callers can
catch one type around a whole engine session.

Hierarchy:
    EngineError
    ├── TransportError       stdin/stdout failure, engine must be discarded
    │   ├── ProcessExited    engine closed its output stream
    │   └── EngineTimeout    read deadline expired, engine was terminated
    ├── EngineSpawnError     executable could not be started
    ├── UnrecognizedOption   engine printed something after setoption
    ├── ProtocolError        malformed reply from the engine
    └── EngineStateError     operation not valid in the current state
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class TransportError(EngineError):
    """Writing to or reading from the engine process failed."""


class ProcessExited(TransportError):
    """The engine closed its output stream (usually because it exited)."""

    def __init__(self, returncode=None):
        self.returncode = returncode
        if returncode is None:
            message = "Engine process closed its output stream"
        else:
            message = f"Engine process exited with code {returncode}"
        super().__init__(message)


class EngineTimeout(TransportError):
    """No line arrived before the read deadline; the process was terminated."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Engine did not answer within {timeout:g}s")


class EngineSpawnError(EngineError):
    """The engine executable could not be started."""

    def __init__(self, command, cause: OSError):
        self.command = command
        self.cause = cause
        super().__init__(f"Unable to run engine {command!r}: {cause}")


class UnrecognizedOption(EngineError):
    """The engine answered a setoption command, which is read as a rejection."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such option: '{name}'")


class ProtocolError(EngineError):
    """The engine sent a line that does not follow the expected format."""


class EngineStateError(EngineError):
    """The engine is not in a state that allows the requested operation."""
