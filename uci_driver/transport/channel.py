"""
Process Channel

Byte-level transport to a UCI engine subprocess: writes raw text to its
stdin and reads newline-terminated lines from its stdout.

The channel adds no framing of its own. write() sends exactly the text it
is given (the caller appends the newline) and read_line() returns exactly
one line, newline included. The only buffering is the line currently being
assembled: the engine's stdout is opened unbuffered and read with
readline(), so no output past the current line is consumed.

End of stream:
    A zero-length read means the engine closed stdout, which in practice
    means it exited. This is a terminal condition and raises ProcessExited
    instead of being retried.
"""

import io
import logging
import subprocess
from typing import BinaryIO, Optional, Sequence, Union

from uci_driver.errors import (
    EngineSpawnError,
    EngineTimeout,
    ProcessExited,
    TransportError,
)
from uci_driver.transport.watchdog import Watchdog

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class ProcessChannel:
    """
    Line-oriented stdin/stdout pipe pair to one engine process.

    The channel exclusively owns its streams and, when spawned, its process.
    It is not thread-safe; Engine serializes access to it.

    Attributes:
        process: Engine subprocess (None when wrapping plain streams)
        read_timeout: Seconds to wait for each line, None to block forever
    """

    def __init__(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        process: Optional[subprocess.Popen] = None,
        read_timeout: Optional[float] = None,
    ):
        """
        Wrap an existing pair of binary streams.

        Args:
            reader: Stream carrying engine output
            writer: Stream carrying engine input
            process: Owning subprocess, killed on timeout and on close()
            read_timeout: Per-line read deadline in seconds. Only enforced
                when a process is attached, since the deadline works by
                killing it.
        """
        self._reader = reader
        self._writer = writer
        self.process = process
        self.read_timeout = read_timeout
        self._closed = False

    @classmethod
    def spawn(
        cls,
        command: Union[str, Sequence[str]],
        read_timeout: Optional[float] = None,
    ) -> "ProcessChannel":
        """
        Start an engine executable with piped stdin and stdout.

        Args:
            command: Path to the executable, or a full argv list
            read_timeout: Per-line read deadline in seconds

        Returns:
            Channel owning the new process

        Raises:
            EngineSpawnError: If the executable can't be started
        """
        args = [command] if isinstance(command, str) else list(command)

        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                bufsize=0,
            )
        except OSError as e:
            raise EngineSpawnError(command, e) from e

        logger.info(f"Started engine: {' '.join(args)} (pid {process.pid})")

        # Raw pipe writes may be partial; reads stay unbuffered
        writer = io.BufferedWriter(process.stdin)
        return cls(process.stdout, writer, process=process, read_timeout=read_timeout)

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        """
        Write text to the engine verbatim and flush it.

        Args:
            text: Command text, including its terminating newline

        Raises:
            TransportError: On broken pipe or any other write failure
        """
        logger.info(f"Command: {text!r}")
        try:
            self._writer.write(text.encode(ENCODING))
            self._writer.flush()
        except (OSError, ValueError) as e:
            raise TransportError(f"Failed to write to engine: {e}") from e

    def read_line(self) -> str:
        """
        Block until one full line of engine output is available.

        Returns:
            The line, including its trailing newline

        Raises:
            ProcessExited: If the stream ends before a newline
            EngineTimeout: If read_timeout passed and the engine was killed
            TransportError: On any other read failure
        """
        if self.read_timeout is not None and self.process is not None:
            with Watchdog(self.process, self.read_timeout) as watchdog:
                raw = self._readline()
            if watchdog.expired:
                raise EngineTimeout(self.read_timeout)
        else:
            raw = self._readline()

        if not raw.endswith(b"\n"):
            if raw:
                logger.debug(f"Discarding unterminated output: {raw!r}")
            raise ProcessExited(self._returncode())

        line = raw.decode(ENCODING, errors="replace")
        logger.debug(line.rstrip())
        return line

    def _readline(self) -> bytes:
        try:
            return self._reader.readline()
        except (OSError, ValueError) as e:
            raise TransportError(f"Failed to read from engine: {e}") from e

    def _returncode(self) -> Optional[int]:
        if self.process is None:
            return None
        try:
            return self.process.wait(timeout=1.0)
        except subprocess.TimeoutExpired:
            return None

    def close(self) -> None:
        """
        Stop the engine process, if any, and close both streams.

        May be called from another thread while a read is blocked: the
        process is stopped first, so the blocked read ends with EOF.
        """
        if self._closed:
            return
        self._closed = True

        if self.process is not None and self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=1.0)
            except subprocess.TimeoutExpired:
                logger.warning(f"Engine pid {self.process.pid} ignored terminate, killing it")
                self.process.kill()
                self.process.wait()

        for stream in (self._writer, self._reader):
            try:
                stream.close()
            except OSError as e:
                # Broken pipe while flushing on close
                logger.debug(f"Error closing engine stream: {e}")

        if self.process is not None:
            logger.info(f"Engine pid {self.process.pid} stopped (code {self.process.returncode})")
