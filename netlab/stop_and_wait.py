"""Stop-and-wait transfer with simulated losses on odd-numbered frames."""

from __future__ import annotations

import logging
import socket
import sys
import time

from .tcp_chat import _accepted, _role_parser, _run_cli

FRAME_SIZE = 19
FRAME = b"frame"
ACK = b"ack"
DEFAULT_FRAMES = 5

logger = logging.getLogger(__name__)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    received = b""
    while len(received) < size:
        chunk = sock.recv(size - len(received))
        if not chunk:
            break
        received += chunk
    return received


def _simulate_loss(lost: str, retransmitting: str) -> None:
    logger.info(lost)
    for second in range(3):
        logger.info("Waiting for %d sec", second)
    logger.info(retransmitting)


def send_frames(sock: socket.socket, frames: int, delay: float) -> list[int]:
    """Send ``frames`` frames, each waiting for its acknowledgement.

    Odd-numbered frames are treated as lost once and retransmitted after
    ``delay`` seconds. Returns the numbers of the acknowledged frames.
    """
    acknowledged = []
    for number in range(1, frames + 1):
        logger.info("Sending frame is %d", number)
        if number % 2:
            _simulate_loss("Packet lossed", "Retransmitting....")
            time.sleep(delay)
        sock.sendall(FRAME.ljust(FRAME_SIZE, b"\0"))
        logger.info("Frame %d send", number)
        if _recv_exact(sock, FRAME_SIZE).startswith(ACK):
            logger.info("Received ack from %dth frame", number)
            acknowledged.append(number)
    return acknowledged


def receive_frames(sock: socket.socket, frames: int) -> list[int]:
    """Receive ``frames`` frames and acknowledge each.

    Acknowledgements of odd-numbered frames are treated as lost once and
    resent. Returns the numbers of the frames that arrived intact.
    """
    received = []
    for number in range(1, frames + 1):
        if _recv_exact(sock, FRAME_SIZE).startswith(FRAME):
            logger.info("Frame %d recv", number)
            received.append(number)
        else:
            logger.info("Frame not recv")
        if number % 2:
            _simulate_loss("Ack lost", "Retransmitting ack.......")
        logger.info("sending ack for frame %d", number)
        sock.sendall(ACK.ljust(FRAME_SIZE, b"\0"))
    return received


def main(argv=None) -> int:
    """Run the sending or the receiving side of a stop-and-wait transfer."""
    parser = _role_parser("netlab-stop-and-wait", "Stop-and-wait transfer.")
    parser.add_argument("--frames", type=int, default=DEFAULT_FRAMES)
    parser.add_argument("--delay", type=float, default=3.0)
    args = parser.parse_args(argv)

    def action() -> None:
        if args.role == "server":
            with _accepted(args.host, args.port) as (conn, address):
                logger.info("connected to the IP: %s and Port:%i", address[0], address[1])
                receive_frames(conn, args.frames)
        else:
            with socket.create_connection((args.host, args.port)) as sock:
                logger.info("Connected to the network")
                send_frames(sock, args.frames, args.delay)

    return _run_cli(action)


if __name__ == "__main__":
    sys.exit(main())