"""One-shot message exchange over UDP."""

from __future__ import annotations

import logging
import socket
import sys
from collections.abc import Callable

from .tcp_chat import _chat_main

MESSAGE_SIZE = 5000

logger = logging.getLogger(__name__)


def serve_once(host: str, port: int, respond: Callable[[str], str]) -> str:
    """Wait for one datagram, reply with ``respond(message)`` and return the message."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((host, port))
        data, address = sock.recvfrom(MESSAGE_SIZE)
        logger.info("Client IP %s and Port %i", address[0], address[1])
        message = data.decode(errors="replace")
        sock.sendto(respond(message).encode(), address)
    return message


def send_message(host: str, port: int, message: str) -> str:
    """Send one datagram to the server and return the datagram it sends back."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(message.encode(), (host, port))
        data, _ = sock.recvfrom(MESSAGE_SIZE)
    return data.decode(errors="replace")


def main(argv=None) -> int:
    """Run either side of the exchange, reading the text to send from stdin."""
    return _chat_main(
        argv,
        prog="netlab-udp",
        transport="UDP",
        serve=serve_once,
        send=send_message,
        shown="Message of client side is {}\n",
        ask="Enter the message for server:",
        answer="\nMessage from server side is {}",
    )


if __name__ == "__main__":
    sys.exit(main())