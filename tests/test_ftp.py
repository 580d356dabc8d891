import socket
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from netlab.ftp import RemoteFileError, fetch, serve_file, serve_once


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _retry(call):
    for _ in range(200):
        try:
            return call()
        except ConnectionRefusedError:
            time.sleep(0.02)
    raise AssertionError("server never started")


def _read_all(sock):
    data = b""
    while chunk := sock.recv(4096):
        data += chunk
    return data


def _request(name):
    return name.encode().ljust(50, b"\0")


def test_serve_file_records(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = b"first line\nsecond line\n" + b"x" * 250 + b"\nlast"
    (tmp_path / "data.txt").write_bytes(content)
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(_request("data.txt"))
        assert serve_file(server_side, 0) is True
        server_side.shutdown(socket.SHUT_WR)
        raw = _read_all(client_side)
    assert len(raw) % 100 == 0
    records = [raw[i:i + 100].split(b"\0", 1)[0] for i in range(0, len(raw), 100)]
    assert records[-1] == b"completed"
    assert b"".join(records[:-1]) == content
    assert all(len(record) <= 99 for record in records)


def test_serve_file_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    server_side, client_side = socket.socketpair()
    with server_side, client_side:
        client_side.sendall(_request("absent.txt"))
        assert serve_file(server_side, 0) is False
        server_side.shutdown(socket.SHUT_WR)
        raw = _read_all(client_side)
    assert raw.split(b"\0", 1)[0] == b"error"


def test_fetch_round_trip(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = b"alpha\nbeta\ngamma\n"
    (tmp_path / "src.txt").write_bytes(content)
    port = _free_port()
    with ThreadPoolExecutor(1) as pool:
        future = pool.submit(serve_once, "127.0.0.1", port, 0)
        written = _retry(lambda: fetch("127.0.0.1", port, "src.txt", tmp_path / "dst.txt"))
        assert future.result(timeout=5) is True
    assert written == len(content)
    assert (tmp_path / "dst.txt").read_bytes() == content


def test_fetch_missing_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    port = _free_port()
    with ThreadPoolExecutor(1) as pool:
        future = pool.submit(serve_once, "127.0.0.1", port, 0)
        with pytest.raises(RemoteFileError):
            _retry(lambda: fetch("127.0.0.1", port, "nothing.txt", tmp_path / "out.txt"))
        assert future.result(timeout=5) is False


def test_fetch_name_too_long(tmp_path):
    with pytest.raises(ValueError):
        fetch("127.0.0.1", _free_port(), "n" * 60, tmp_path / "out.txt")