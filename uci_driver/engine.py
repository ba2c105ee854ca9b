"""
UCI Engine Client

Synchronous client for one UCI engine subprocess.

Protocol Flow:
    spawn            engine prints a banner line
    → uci            engine prints id/option lines and uciok
    → isready        engine prints readyok
    → setoption ...  engine prints nothing if it accepted the option
    → position ...
    → go movetime N  engine prints info lines and "bestmove <move>"

Lifecycle:
    CREATED → HANDSHAKE → READY, then every public call goes
    READY → BUSY → READY. A transport failure leaves the engine FAILED and
    close() leaves it CLOSED; in both states every call is rejected.

Threading:
    Each public call holds an instance lock for its full duration. The
    protocol has no request ids, so calls from several threads are run one
    at a time rather than interleaved on the pipe. close() is the exception:
    it takes no lock, so another thread can stop an engine that hangs.

Example:
    with Engine("stockfish") as engine:
        engine.set_option("Skill Level", 5)
        engine.make_moves(["e2e4", "e7e5"])
        print(engine.movetime(200).bestmove())
"""

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Union

from uci_driver.config import EngineConfig, SearchBudget
from uci_driver.errors import (
    EngineError,
    EngineStateError,
    TransportError,
    UnrecognizedOption,
)
from uci_driver.protocol.commands import CommandProtocol
from uci_driver.protocol.formatting import (
    MoveLike,
    PositionLike,
    format_go,
    format_option,
    format_position,
)
from uci_driver.transport.channel import ProcessChannel

logger = logging.getLogger(__name__)

HANDSHAKE_COMMAND = "uci"
NEW_GAME_COMMAND = "ucinewgame"


class EngineState(Enum):
    """Lifecycle state of an Engine."""
    CREATED = "created"
    HANDSHAKE = "handshake"
    READY = "ready"
    BUSY = "busy"
    FAILED = "failed"
    CLOSED = "closed"


class Engine:
    """
    Client for one UCI engine process.

    Attributes:
        config: Session settings
        budget: Search budget used by bestmove()
        channel: Transport to the engine process
        protocol: Synchronization layer over the channel
        state: Current lifecycle state
        handshake_output: Lines the engine printed in reply to "uci"
    """

    def __init__(
        self,
        path: Optional[Union[str, Sequence[str]]] = None,
        config: Optional[EngineConfig] = None,
        *,
        channel: Optional[ProcessChannel] = None,
    ):
        """
        Start an engine and complete the UCI handshake.

        The instance is only returned once the engine has answered the
        handshake barrier.

        Args:
            path: Engine executable, or an argv list
            config: Session settings (default: EngineConfig())
            channel: Already-open channel, used instead of spawning a process

        Raises:
            ValueError: If both or neither of path and channel are given
            EngineSpawnError: If the executable can't be started
            TransportError: If the engine fails during the handshake
        """
        if (path is None) == (channel is None):
            raise ValueError("Pass exactly one of path or channel")

        self.config = config if config else EngineConfig()
        self.budget = self.config.budget
        self.state = EngineState.CREATED
        self.handshake_output: List[str] = []

        self._lock = threading.Lock()
        self._position_set = False

        if channel is None:
            channel = ProcessChannel.spawn(path, read_timeout=self.config.read_timeout)
        elif self.config.read_timeout is not None:
            channel.read_timeout = self.config.read_timeout

        self.channel = channel
        self.protocol = CommandProtocol(channel)

        try:
            self._handshake()
        except BaseException:
            # Includes KeyboardInterrupt, so a spawned process is not left behind
            self.state = EngineState.FAILED
            self.channel.close()
            raise

    def _handshake(self):
        self.state = EngineState.HANDSHAKE

        if self.config.expect_greeting:
            greeting = self.channel.read_line().strip()
            logger.debug(f"Greeting: {greeting}")

        self.protocol.send(HANDSHAKE_COMMAND)
        self.handshake_output = self.protocol.barrier()

        self.state = EngineState.READY
        logger.info(f"Engine ready: {self.name or 'unnamed'}")

    @property
    def name(self) -> Optional[str]:
        """Engine name from its "id name" line, if it sent one."""
        for line in self.handshake_output:
            if line.startswith("id name "):
                return line[len("id name "):].strip()
        return None

    @contextmanager
    def _operation(self, description: str):
        with self._lock:
            if self.state is not EngineState.READY:
                raise EngineStateError(
                    f"Cannot {description}: engine is {self.state.value}"
                )

            self.state = EngineState.BUSY
            try:
                yield
            except TransportError:
                self._finish(EngineState.FAILED)
                logger.error(f"Engine unusable after failed {description}")
                raise
            except (EngineError, ValueError):
                self._finish(EngineState.READY)
                raise
            except BaseException:
                # Interrupted mid-exchange, pipe contents unknown
                self._finish(EngineState.FAILED)
                raise
            self._finish(EngineState.READY)

    def _finish(self, state: EngineState):
        # close() from another thread wins over the outcome of the call
        if self.state is not EngineState.CLOSED:
            self.state = state

    def movetime(self, movetime: int) -> "Engine":
        """
        Search for a fixed time per move.

        Args:
            movetime: Think time in milliseconds

        Returns:
            This engine, for chaining
        """
        with self._lock:
            self.budget = SearchBudget.by_time(movetime)
        return self

    def depth(self, depth: int) -> "Engine":
        """
        Search to a fixed depth per move.

        Args:
            depth: Search depth in plies

        Returns:
            This engine, for chaining
        """
        with self._lock:
            self.budget = SearchBudget.by_depth(depth)
        return self

    def set_option(self, name: str, value) -> None:
        """
        Set an engine-specific option.

        Engines stay silent when they accept an option, so any output
        before readyok is taken as a rejection. Some engines print
        informational lines for options they did accept; those show up
        here as UnrecognizedOption as well.

        Args:
            name: Option name, e.g. "Skill Level"
            value: New value; bools are sent as true/false

        Raises:
            UnrecognizedOption: If the engine printed anything in reply
        """
        command = format_option(name, value)

        with self._operation(f"set option {name!r}"):
            output = self.protocol.send_and_drain(command)
            if "\n".join(output).strip():
                logger.warning(f"Option {name!r} rejected: {output}")
                raise UnrecognizedOption(name)

    def make_moves(self, moves: Iterable[MoveLike]) -> None:
        """
        Set up the start position and play the given moves on it.

        Args:
            moves: Moves in coordinate notation ("e2e4") or chess.Move
        """
        self._send_position(format_position(None, moves))

    def set_position(self, fen: PositionLike) -> None:
        """
        Set up the position described by a FEN string (or chess.Board).

        Example:
            engine.set_position("2k4R/8/3K4/8/8/8/8/8 b - - 0 1")
            engine.bestmove()  # "c8b7"
        """
        self.make_moves_from_position(fen, ())

    def make_moves_from_position(
        self, fen: PositionLike, moves: Iterable[MoveLike]
    ) -> None:
        """Set up a FEN position and play the given moves on it."""
        self._send_position(format_position(fen, moves))

    def _send_position(self, command: str):
        # No barrier: the engine reads stdin in order, so the next
        # command will see this position.
        with self._operation("set position"):
            self.protocol.send(command)
            self._position_set = True

    def new_game(self) -> None:
        """Tell the engine the next position is from a different game."""
        with self._operation("start new game"):
            self.protocol.send_and_drain(NEW_GAME_COMMAND)
            self._position_set = False

    def bestmove(self) -> str:
        """
        Search the current position with the configured budget.

        Returns:
            Best move in coordinate notation, e.g. "e2e4"
            ("(none)" if the engine has no legal move)

        Raises:
            EngineStateError: If no position was set since the last new game
        """
        with self._operation("search"):
            if not self._position_set:
                raise EngineStateError("Cannot search: no position has been set")

            go_command = format_go(self.budget)
            best = self.protocol.search(go_command)
            logger.info(f"Best move ({self.budget}): {best}")
            return best

    def command(self, text: str) -> str:
        """
        Send arbitrary text to the engine and return what it printed.

        A "position" command counts as setting the position for
        bestmove(), and "ucinewgame" clears it, as with the typed calls.

        Example:
            engine.command("d")  # Stockfish board diagram

        Returns:
            Output lines up to readyok, joined with newlines
        """
        text = text.strip()
        tokens = text.split()
        keyword = tokens[0] if tokens else ""

        with self._operation(f"run {text!r}"):
            output = self.protocol.send_and_drain(text)
            if keyword == "position":
                self._position_set = True
            elif keyword == NEW_GAME_COMMAND:
                self._position_set = False
            return "\n".join(output)

    def close(self) -> None:
        """
        Stop the engine process. Safe to call more than once.

        Does not wait for a call in progress, so a watchdog thread can use
        it to end a hung search; that call then fails with a
        TransportError and the engine stays closed.
        """
        if self.state is EngineState.CLOSED:
            return
        self.state = EngineState.CLOSED
        self.channel.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"Engine(name={self.name!r}, state={self.state.value}, budget={self.budget})"
