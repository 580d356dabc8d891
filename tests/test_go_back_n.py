import socket
import threading

import pytest

from netlab import go_back_n
from netlab.go_back_n import FRAME_SIZE, decode_frame, encode_frame, receive_frames, send_frames


class _Script:
    """Returns scripted choices, then always 2 (acknowledge at once)."""

    def __init__(self, choices):
        self._choices = iter(choices)

    def randrange(self, stop):
        return next(self._choices, 2)


def _background(target, *args):
    outcome = {}

    def runner():
        try:
            outcome["value"] = target(*args)
        except BaseException as exc:  # noqa: BLE001
            outcome["error"] = exc

    thread = threading.Thread(target=runner, daemon=True)
    thread.start()
    return thread, outcome


def _next_text(sock):
    data = b""
    while len(data) < FRAME_SIZE:
        chunk = sock.recv(FRAME_SIZE - len(data))
        assert chunk
        data += chunk
    return decode_frame(data)


def test_encode_frame_pads_with_nul_bytes():
    assert encode_frame("7") == b"7" + b"\0" * 79


@pytest.mark.parametrize("text", ["0", "-1", "Exit", "12345"])
def test_encode_decode_round_trip(text):
    record = encode_frame(text)
    assert len(record) == FRAME_SIZE
    assert decode_frame(record) == text


def test_encode_frame_rejects_text_without_room_for_terminator():
    with pytest.raises(ValueError):
        encode_frame("x" * FRAME_SIZE)


def test_decode_frame_stops_at_first_nul():
    assert decode_frame(b"Exit\0garbage") == "Exit"


@pytest.mark.parametrize(
    ("choices", "script"),
    [
        ([], [("0", "0")]),
        ([0], [("0", None), ("1", "-1"), ("0", "0")]),
    ],
    ids=["in-order", "dropped-then-discarded"],
)
def test_receiver_conversation(choices, script):
    tester, receiver = socket.socketpair()
    tester.settimeout(5)
    with tester, receiver:
        thread, outcome = _background(receive_frames, receiver, _Script(choices), 0)
        for sent, answer in script:
            tester.sendall(encode_frame(sent))
            if answer is not None:
                assert _next_text(tester) == answer
        tester.sendall(encode_frame("Exit"))
        thread.join(5)
    assert not thread.is_alive()
    assert outcome["value"] == [0]


def test_sender_wire_exchange_for_single_frame():
    sender, tester = socket.socketpair()
    tester.settimeout(5)
    with sender, tester:
        thread, outcome = _background(send_frames, sender, 1, 1, 2.0)
        assert _next_text(tester) == "0"
        tester.sendall(encode_frame("0"))
        assert _next_text(tester) == "Exit"
        thread.join(5)
    assert outcome["value"] == [0]


@pytest.mark.parametrize(
    ("frames", "window", "choices", "timeout"),
    [(1, 1, [], 2.0), (5, 2, [], 2.0), (4, 4, [], 2.0), (3, 6, [], 2.0), (2, 2, [0], 0.3)],
)
def test_full_transfer_acknowledges_every_frame(frames, window, choices, timeout):
    sender, receiver = socket.socketpair()
    with sender, receiver:
        thread, received = _background(receive_frames, receiver, _Script(choices), 0)
        acknowledged = send_frames(sender, frames, window, timeout)
        thread.join(5)
    assert acknowledged == list(range(frames))
    assert received["value"] == list(range(frames))


@pytest.mark.parametrize(("frames", "window"), [(0, 2), (3, 0)])
def test_sender_rejects_invalid_sizes(frames, window):
    sender, receiver = socket.socketpair()
    with sender, receiver, pytest.raises(ValueError):
        send_frames(sender, frames, window, 1.0)


@pytest.mark.parametrize("side", ["sender", "receiver"])
def test_fails_when_peer_closes(side):
    mine, peer = socket.socketpair()
    peer.close()
    with mine, pytest.raises(ConnectionError):
        if side == "sender":
            send_frames(mine, 3, 2, 1.0)
        else:
            receive_frames(mine, _Script([]), 0)


def test_main_reports_bad_window_input(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt="": "abc")
    assert go_back_n.main(["client", "--frames", "3", "--port", "1"]) == 1
    assert "error" in capsys.readouterr().err