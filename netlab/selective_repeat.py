"""Selective-repeat ARQ over a stream socket, with negative acknowledgements.

Records use the same 80-byte NUL-padded format as the Go-Back-N transfer.
The receiver answers every frame: with its number when it is taken, or with
``-1`` as a negative acknowledgement when it is simulated as lost.
"""

from __future__ import annotations

import logging
import random
import socket
import sys
import time

from .go_back_n import (
    EXIT,
    NO_ACK,
    _check_sizes,
    _Chooser,
    _parse_number,
    _RecordReader,
    _send,
)
from .go_back_n import decode_frame as _decode_record
from .go_back_n import encode_frame as _encode_record
from .tcp_chat import _accepted, _role_parser, _run_cli

__all__ = ["encode_frame", "decode_frame", "send_frames", "receive_frames", "main"]

DEFAULT_HOST = "127.0.0.1"
DEFAULT_BIND = "0.0.0.0"
DEFAULT_PORT = 8080

logger = logging.getLogger(__name__)


def encode_frame(text):
    """Encode ``text`` as one fixed-size, NUL-padded record."""
    return _encode_record(text)


def decode_frame(data):
    """Decode one NUL-padded record back to its text."""
    return _decode_record(data)


def send_frames(sock: socket.socket, frame_count: int, window_size: int, timeout: float) -> list[int]:
    """Send frames ``0..frame_count-1`` until as many acknowledgements arrive.

    A negative acknowledgement resends the oldest unacknowledged frame; a
    wait longer than ``timeout`` seconds simply waits again. Returns the
    acknowledgements counted, in the order they arrived.
    """
    _check_sizes(frame_count, window_size)

    def transmit(number: int, label: str = "Frame %d sent") -> None:
        _send(sock, str(number))
        logger.info(label, number)

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
        while len(acknowledged) != frame_count:
            if last - base != window_size - 1 and next_frame != frame_count:
                transmit(next_frame)
                last += 1
                next_frame += 1
            try:
                ack = _parse_number(reader.read())
            except TimeoutError:
                continue
            if ack == NO_ACK:
                logger.info("Acknowledgement not received for %d", base)
                logger.info("Resending frame")
                transmit(base, "Frame sent: %d")
                continue
            if ack + 1 != frame_count:
                base += 1
            logger.info("Acknowledgement received: %d", ack)
            acknowledged.append(ack)
        _send(sock, EXIT)
        return acknowledged
    finally:
        sock.settimeout(previous_timeout)


def receive_frames(sock: socket.socket, rng: _Chooser, delay: float) -> list[int]:
    """Answer each frame until ``Exit``, simulating lost and late frames.

    ``rng.randrange(3)`` picks the outcome: 0 answers with a negative
    acknowledgement, 1 acknowledges after ``2 * delay`` seconds, 2
    acknowledges at once. Every record is read after a pause of ``delay``
    seconds. Returns the acknowledged frame numbers in arrival order.
    """
    reader = _RecordReader(sock)
    received: list[int] = []
    while True:
        time.sleep(delay)
        text = reader.read()
        if text == EXIT:
            logger.info("Exit")
            return received
        frame = _parse_number(text)
        outcome = rng.randrange(3)
        if outcome == 0:
            logger.info("Frame %d not received", frame)
            logger.info("Negative Acknowledgement sent: %d", frame)
            _send(sock, str(NO_ACK))
            continue
        if outcome == 1:
            time.sleep(2 * delay)
        logger.info("Frame %d received", frame)
        logger.info("Acknowledgement sent: %d", frame)
        _send(sock, str(frame))
        received.append(frame)


def _ask(given: int | None, prompt: str) -> int:
    if given is not None:
        return given
    try:
        return int(input(prompt))
    except EOFError:
        raise ValueError("not enough input") from None


def main(argv=None) -> int:
    """Run the sending or the receiving side of a selective-repeat transfer."""
    parser = _role_parser(
        "netlab-selective-repeat", "Selective-repeat ARQ transfer.", host=None, port=DEFAULT_PORT
    )
    parser.add_argument("--frames", type=int)
    parser.add_argument("--window", type=int)
    parser.add_argument("--timeout", type=float, default=3.0)
    parser.add_argument("--delay", type=float, default=1.0)
    parser.add_argument("--seed", type=int)
    args = parser.parse_args(argv)

    def action() -> None:
        if args.role == "server":
            host = args.host if args.host is not None else DEFAULT_BIND
            with _accepted(host, args.port, backlog=5) as (conn, _):
                logger.info("Server accept the client")
                receive_frames(conn, random.Random(args.seed), args.delay)
        else:
            host = args.host if args.host is not None else DEFAULT_HOST
            frames = _ask(args.frames, "Enter the number of frames: ")
            window = _ask(args.window, "Enter the window size: ")
            with socket.create_connection((host, args.port)) as sock:
                logger.info("Connected to the server")
                send_frames(sock, frames, window, args.timeout)

    return _run_cli(action, (OSError, ValueError))


if __name__ == "__main__":
    sys.exit(main())