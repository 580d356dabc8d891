"""Go-Back-N ARQ over a stream socket, with a receiver that simulates losses.

Every message is an 80-byte NUL-padded record holding decimal text: a frame
number from the sender, an acknowledgement number from the receiver, or
``Exit`` from the sender once the last frame is acknowledged.
"""

from __future__ import annotations

import argparse
import logging
import random
import re
import socket
import sys
import time
from typing import Protocol

FRAME_SIZE = 80
EXIT = "Exit"
NO_ACK = -1
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 2000

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"\s*([+-]?\d+)")


class _Chooser(Protocol):
    def randrange(self, stop: int) -> int: ...


def encode_frame(text: str) -> bytes:
    """Pack ``text`` into one NUL-padded record."""
    data = text.encode()
    if len(data) >= FRAME_SIZE:
        raise ValueError(f"frame text must be shorter than {FRAME_SIZE} bytes")
    return data.ljust(FRAME_SIZE, b"\0")


def decode_frame(data: bytes) -> str:
    """Return the text of a record, up to its first NUL byte."""
    return data.split(b"\0", 1)[0].decode(errors="replace")


def _parse_number(text: str) -> int:
    """Read a leading decimal number; text without one reads as zero."""
    match = _NUMBER.match(text)
    return int(match.group(1)) if match else 0


class _RecordReader:
    """Reads whole records, keeping partial data across timeouts."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._pending = bytearray()

    def read(self) -> str:
        while len(self._pending) < FRAME_SIZE:
            chunk = self._sock.recv(FRAME_SIZE - len(self._pending))
            if not chunk:
                raise ConnectionError("peer closed the connection")
            self._pending += chunk
        record = bytes(self._pending[:FRAME_SIZE])
        del self._pending[:FRAME_SIZE]
        return decode_frame(record)


def _send(sock: socket.socket, text: str) -> None:
    sock.sendall(encode_frame(text))


def _check_sizes(frame_count: int, window_size: int) -> None:
    if frame_count < 1:
        raise ValueError("frame count must be at least 1")
    if window_size < 1:
        raise ValueError("window size must be at least 1")


def send_frames(sock: socket.socket, frame_count: int, window_size: int, timeout: float) -> list[int]:
    """Send frames ``0..frame_count-1`` with a sliding window of ``window_size``.

    When no acknowledgement arrives within ``timeout`` seconds, every frame
    from the oldest unacknowledged one to the end of the window is resent.
    Returns the acknowledgements accepted, in order.
    """
    _check_sizes(frame_count, window_size)

    def transmit(number: int) -> None:
        _send(sock, str(number))
        logger.info("Frame %d sent", number)

    reader = _RecordReader(sock)
    acknowledged: list[int] = []
    base = 0
    last = window_size - 1
    next_frame = min(frame_count, window_size)
    for number in range(next_frame):
        transmit(number)

    previous_timeout = sock.gettimeout()
    sock.settimeout(timeout)
    try:
        resent = False
        while True:
            if last - base != window_size - 1 and not resent and next_frame != frame_count:
                transmit(next_frame)
                last += 1
                next_frame += 1
            resent = False
            try:
                ack = _parse_number(reader.read())
            except TimeoutError:
                logger.info("Acknowledgement not received for %d", base)
                logger.info("Resending frames")
                for number in range(base, min(frame_count, base + window_size)):
                    transmit(number)
                resent = True
                continue
            if ack + 1 == frame_count:
                logger.info("Acknowledgement received: %d", ack)
                logger.info("Exit")
                acknowledged.append(ack)
                _send(sock, EXIT)
                return acknowledged
            if ack == base:
                base += 1
                acknowledged.append(ack)
                logger.info("Acknowledgement received: %d", ack)
    finally:
        sock.settimeout(previous_timeout)


def receive_frames(sock: socket.socket, rng: _Chooser, delay: float) -> list[int]:
    """Accept frames in order until ``Exit``, simulating lost and late frames.

    For each in-order frame, ``rng.randrange(3)`` picks the outcome: 0 drops it
    silently, 1 acknowledges it after ``2 * delay`` seconds, 2 acknowledges it
    at once. Out-of-order frames are discarded and the last acknowledgement is
    repeated. Every record is read after a pause of ``delay`` seconds.
    Returns the accepted frame numbers.
    """
    reader = _RecordReader(sock)
    accepted: list[int] = []
    expected = 0
    last_ack = NO_ACK
    while True:
        time.sleep(delay)
        text = reader.read()
        if text == EXIT:
            logger.info("Exit")
            return accepted
        frame = _parse_number(text)
        if frame != expected:
            logger.info("Frame %d discarded", frame)
            logger.info("Acknowledgement sent: %d", last_ack)
            _send(sock, str(last_ack))
            continue
        outcome = rng.randrange(3)
        if outcome == 0:
            logger.debug("Frame %d lost", frame)
            continue
        if outcome == 1:
            time.sleep(2 * delay)
        last_ack = frame
        logger.info("Frame %d received", frame)
        logger.info("Acknowledgement sent: %d", last_ack)
        _send(sock, str(last_ack))
        expected = frame + 1
        accepted.append(frame)


def main(argv=None) -> int:
    """Run the sending or the receiving side of a Go-Back-N transfer."""
    parser = argparse.ArgumentParser(prog="netlab-go-back-n", description="Go-Back-N ARQ transfer.")
    parser.add_argument("role", choices=["server", "client"])
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--frames", type=int)
    parser.add_argument("--window", type=int)
    parser.add_argument("--timeout", type=float, default=3.0)
    parser.add_argument("--delay", type=float, default=1.0)
    parser.add_argument("--seed", type=int)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        if args.role == "server":
            with socket.create_server((args.host, args.port), backlog=1) as server:
                conn, _ = server.accept()
                logger.info("Connected Successfully with client")
                with conn:
                    receive_frames(conn, random.Random(args.seed), args.delay)
        else:
            frames = args.frames if args.frames is not None else int(input("Enter no.of frames:"))
            window = args.window if args.window is not None else int(input("\nEnter the window size:"))
            with socket.create_connection((args.host, args.port)) as sock:
                logger.info("Connected successfully with server")
                send_frames(sock, frames, window, args.timeout)
    except EOFError:
        print("error: not enough input", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())