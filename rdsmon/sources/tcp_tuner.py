"""Group source for a networked tuner speaking the hex line protocol.

The tuner sends hex group lines and ``% Freq <kHz>`` reports; it accepts
``SET_FREQ <kHz>``, ``UP``, ``DOWN``, ``SEEK UP`` and ``SEEK DOWN`` commands.
"""

from __future__ import annotations

import logging
import socket
import threading
from collections import deque
from typing import Iterator

from ..events import FrequencyChangeEvent, GroupEvent, InputEvent
from .hexfile import BITS_PER_GROUP, HexLineError, parse_hex_line

logger = logging.getLogger(__name__)


class EndOfStream(Exception):
    """The tuner closed the connection."""


class TCPTunerGroupReader:
    """Reads input events from a TCP tuner and sends tuning commands.

    Example:
        with TCPTunerGroupReader("127.0.0.1", 8750) as tuner:
            tuner.set_frequency(87_600)
            for event in tuner:
                decoder.process_event(event)
    """

    def __init__(self, host: str, port: int, timeout: float | None = None) -> None:
        self.host = host
        self.port = port
        self._sock = socket.create_connection((host, port), timeout=timeout)
        self._reader = self._sock.makefile("r", encoding="ascii", newline="\n")
        self._lock = threading.Lock()
        self._send_lock = threading.Lock()
        self._pending: deque[InputEvent] = deque()
        self._new_groups = False
        self.frequency_khz: int | None = None
        self.bit_time = 0

    @property
    def device_name(self) -> str:
        return f"TCP {self.host}:{self.port}"

    def _send(self, command: str) -> None:
        with self._send_lock:
            self._sock.sendall((command + "\n").encode("ascii"))
        logger.debug("Sent tuner command %r", command)

    def set_frequency(self, frequency_khz: int) -> None:
        self._send(f"SET_FREQ {int(frequency_khz)}")

    def tune(self, up: bool) -> None:
        self._send("UP" if up else "DOWN")

    def seek(self, up: bool) -> None:
        self._send("SEEK " + ("UP" if up else "DOWN"))

    def new_groups(self) -> bool:
        """True if groups arrived since the previous call."""
        with self._lock:
            new = self._new_groups
            self._new_groups = False
            return new

    def _read_until(self, prefix: str | None) -> str:
        while True:
            line = self._reader.readline()
            if not line:
                raise EndOfStream(self.device_name)
            try:
                event = parse_hex_line(line, self.bit_time)
            except HexLineError as e:
                logger.warning("Ignoring line from %s: %s", self.device_name, e)
                event = None
            if isinstance(event, GroupEvent):
                self._new_groups = True
                self.bit_time += BITS_PER_GROUP
            elif isinstance(event, FrequencyChangeEvent):
                self.frequency_khz = event.frequency_khz
            if event is not None:
                self._pending.append(event)
            if prefix is None or line.startswith(prefix):
                return line

    def get_event(self) -> InputEvent:
        """Block until the next input event arrives."""
        with self._lock:
            while not self._pending:
                self._read_until(None)
            return self._pending.popleft()

    def reported_frequency(self) -> int | None:
        """Wait for the tuner's next frequency report."""
        with self._lock:
            self._read_until("% Freq")
            return self.frequency_khz

    def __iter__(self) -> Iterator[InputEvent]:
        while True:
            try:
                yield self.get_event()
            except EndOfStream:
                logger.info("%s closed the stream", self.device_name)
                return
            except OSError as e:
                logger.error("Read from %s failed: %s", self.device_name, e)
                return

    def close(self) -> None:
        try:
            self._reader.close()
        finally:
            self._sock.close()

    def __enter__(self) -> TCPTunerGroupReader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
