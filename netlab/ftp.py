"""A minimal file-fetch protocol over TCP.

The client sends the file name in a NUL-padded 50-byte record. The server
answers with 100-byte NUL-padded records: file content split by line into
chunks of at most 99 bytes, then ``completed``; or a single ``error`` record
when the file cannot be opened.
"""

from __future__ import annotations

import argparse
import logging
import os
import socket
import sys
import time

NAME_SIZE = 50
RECORD_SIZE = 100
ERROR = b"error"
COMPLETED = b"completed"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 2000

logger = logging.getLogger(__name__)


class RemoteFileError(OSError):
    """The server reported that the requested file does not exist."""


def _pad(data: bytes, size: int) -> bytes:
    return data.ljust(size, b"\0")


def _unpad(record: bytes) -> bytes:
    return record.split(b"\0", 1)[0]


def _recv_exact(conn: socket.socket, size: int) -> bytes:
    received = b""
    while len(received) < size:
        chunk = conn.recv(size - len(received))
        if not chunk:
            break
        received += chunk
    return received


def serve_file(conn: socket.socket, delay: float) -> bool:
    """Answer one file request on an open connection.

    Returns True if the file was sent, False if it could not be opened.
    """
    name = _unpad(_recv_exact(conn, NAME_SIZE)).decode(errors="replace")
    try:
        handle = open(name, "rb")
    except OSError:
        conn.sendall(_pad(ERROR, RECORD_SIZE))
        return False
    with handle:
        for chunk in iter(lambda: handle.readline(RECORD_SIZE - 1), b""):
            conn.sendall(_pad(chunk, RECORD_SIZE))
            time.sleep(delay)
    logger.info("Done")
    conn.sendall(_pad(COMPLETED, RECORD_SIZE))
    return True


def serve_once(host: str, port: int, delay: float) -> bool:
    """Accept one client and serve the file it asks for."""
    with socket.create_server((host, port), backlog=1) as server:
        conn, address = server.accept()
        logger.info("Connect to IP: %s and port: %i", address[0], address[1])
        with conn:
            return serve_file(conn, delay)


def fetch(host: str, port: int, remote_name: str, local_path: str | os.PathLike) -> int:
    """Download ``remote_name`` from the server into ``local_path``.

    Returns the number of bytes written.
    """
    encoded = remote_name.encode()
    if len(encoded) >= NAME_SIZE:
        raise ValueError(f"file name must be shorter than {NAME_SIZE} bytes")
    with socket.create_connection((host, port)) as sock, open(local_path, "wb") as out:
        sock.sendall(_pad(encoded, NAME_SIZE))
        written = 0
        while True:
            record = _recv_exact(sock, RECORD_SIZE)
            if not record:
                raise ConnectionError("connection closed before the transfer completed")
            payload = _unpad(record)
            if payload == ERROR:
                raise RemoteFileError(f"{remote_name}: file does not exist on the server")
            if payload == COMPLETED:
                return written
            written += out.write(payload)


def main(argv=None) -> int:
    """Serve one file request, or fetch one file from a server."""
    parser = argparse.ArgumentParser(prog="netlab-ftp", description="Transfer one file over TCP.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    roles = parser.add_subparsers(dest="role", required=True)
    server = roles.add_parser("server")
    server.add_argument("--delay", type=float, default=1.0)
    client = roles.add_parser("client")
    client.add_argument("remote_name", nargs="?")
    client.add_argument("local_path", nargs="?")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        if args.role == "server":
            serve_once(args.host, args.port, args.delay)
        else:
            remote = args.remote_name or input("Enter the name of the file to open:")
            local = args.local_path or input("\nEnter the name of the file to store:")
            fetch(args.host, args.port, remote, local)
            print("\nFile transferred completed....")
    except RemoteFileError:
        print("\nFile does not exist", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())