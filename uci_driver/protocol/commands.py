"""
Command Protocol

Request/response on top of an unframed line stream.

UCI output carries no request ids and most commands have no reply of their
own, so there is no way to tell where the answer to one command ends.
The one exchange the protocol guarantees is:

    GUI    → isready
    Engine → readyok

and the engine processes its input strictly in order. Sending isready right
after a command therefore acts as a barrier: every line printed before
readyok belongs to that command.

Operations:
    send:            write a command, don't wait for anything
    send_and_drain:  write a command plus isready, collect lines until readyok
    barrier:         isready on its own, collect whatever was still pending
    search:          write a go command, wait for "bestmove <move> ..."

None of these have a timeout of their own. A deadline exists only if the
channel was created with read_timeout.
"""

import logging
from typing import List

from uci_driver.errors import ProtocolError
from uci_driver.transport.channel import ProcessChannel

logger = logging.getLogger(__name__)

PROBE_COMMAND = "isready"
PROBE_MARKER = "readyok"
RESULT_MARKER = "bestmove"


class CommandProtocol:
    """
    Synchronization primitives for one engine channel.

    Attributes:
        channel: Transport to the engine
    """

    def __init__(self, channel: ProcessChannel):
        self.channel = channel

    def send(self, command: str) -> None:
        """
        Send a command without waiting for a reply.

        Args:
            command: Command text without trailing newline
        """
        self.channel.write(f"{command}\n")

    def send_and_drain(self, command: str) -> List[str]:
        """
        Send a command and collect everything the engine prints for it.

        Args:
            command: Command text without trailing newline

        Returns:
            Trimmed output lines in the order received, readyok excluded.
            Empty if the engine printed nothing.
        """
        self.send(command)
        return self.barrier()

    def barrier(self) -> List[str]:
        """
        Send isready and read until readyok.

        Returns:
            Trimmed lines received before readyok
        """
        self.send(PROBE_COMMAND)

        pending: List[str] = []
        while True:
            line = self.channel.read_line().strip()
            if line == PROBE_MARKER:
                return pending
            pending.append(line)

    def search(self, go_command: str) -> str:
        """
        Start a search and wait for its result line.

        Lines before "bestmove" (info, strings) are read and dropped. The
        engine ends the search by itself, so no barrier follows.

        Args:
            go_command: e.g. "go movetime 100"

        Returns:
            The second token of the bestmove line, e.g. "e2e4"

        Raises:
            ProtocolError: If the bestmove line has no move
        """
        self.send(go_command)

        while True:
            line = self.channel.read_line()
            tokens = line.split()
            if not tokens or tokens[0] != RESULT_MARKER:
                continue

            if len(tokens) < 2:
                raise ProtocolError(f"Result line without a move: {line.strip()!r}")

            logger.debug(f"Search finished: {line.strip()}")
            return tokens[1].strip()
