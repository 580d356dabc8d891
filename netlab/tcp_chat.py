"""One-shot message exchange over TCP."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager

CLIENT_MESSAGE_SIZE = 500
SERVER_MESSAGE_SIZE = 5000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 2000

logger = logging.getLogger(__name__)


@contextmanager
def _accepted(host: str, port: int, backlog: int = 1) -> Iterator[tuple[socket.socket, tuple]]:
    """Listen on ``host:port`` and yield the first accepted connection and its address."""
    with socket.create_server((host, port), backlog=backlog) as server:
        conn, address = server.accept()
        with conn:
            yield conn, address


def _role_parser(prog: str, description: str, *, host=DEFAULT_HOST, port=DEFAULT_PORT) -> argparse.ArgumentParser:
    """Build a parser with the role, host and port options every command shares."""
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("role", choices=["server", "client"])
    parser.add_argument("--host", default=host)
    parser.add_argument("--port", type=int, default=port)
    return parser


def _run_cli(action: Callable[[], object], errors: tuple[type[BaseException], ...] = (OSError,)) -> int:
    """Run ``action`` with logging set up, turning ``errors`` into exit status 1."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        action()
    except errors as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def _replier(shown: str) -> Callable[[str], str]:
    def reply(message: str) -> str:
        print(shown.format(message), end="")
        print("Enter the message to client:", end="", flush=True)
        return sys.stdin.readline()

    return reply


def _chat_main(argv, *, prog, transport, serve, send, shown, ask, answer) -> int:
    """Shared command line of the one-shot chat programs."""
    args = _role_parser(prog, f"Exchange one message over {transport}.").parse_args(argv)

    def action() -> None:
        if args.role == "server":
            serve(args.host, args.port, _replier(shown))
        else:
            print(ask, end="", flush=True)
            print(answer.format(send(args.host, args.port, sys.stdin.readline())), end="")

    return _run_cli(action)


def serve_once(host: str, port: int, respond: Callable[[str], str]) -> str:
    """Accept one client, read its message, send back ``respond(message)``.

    Returns the message the client sent.
    """
    with _accepted(host, port) as (conn, address):
        logger.info("Client Connected at IP:%s port %i", address[0], address[1])
        message = conn.recv(CLIENT_MESSAGE_SIZE).decode(errors="replace")
        conn.sendall(respond(message).encode())
    return message


def send_message(host: str, port: int, message: str) -> str:
    """Send one message to the server and return its reply."""
    with socket.create_connection((host, port)) as sock:
        sock.sendall(message.encode())
        return sock.recv(SERVER_MESSAGE_SIZE).decode(errors="replace")


def main(argv=None) -> int:
    """Run either side of the exchange, reading the text to send from stdin."""
    return _chat_main(
        argv,
        prog="netlab-tcp",
        transport="TCP",
        serve=serve_once,
        send=send_message,
        shown="Message from client is {}",
        ask="Enter the message to server:",
        answer="Message from server is {}",
    )


if __name__ == "__main__":
    sys.exit(main())