import socket
from concurrent.futures import ThreadPoolExecutor

from netlab.stop_and_wait import receive_frames, send_frames


def _recv_exact(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_full_exchange_five_frames():
    sender, receiver = socket.socketpair()
    with sender, receiver, ThreadPoolExecutor(1) as pool:
        future = pool.submit(receive_frames, receiver, 5)
        acknowledged = send_frames(sender, 5, 0)
        assert future.result(timeout=5) == [1, 2, 3, 4, 5]
    assert acknowledged == [1, 2, 3, 4, 5]


def test_sender_and_receiver_agree_on_count():
    sender, receiver = socket.socketpair()
    with sender, receiver, ThreadPoolExecutor(1) as pool:
        future = pool.submit(receive_frames, receiver, 3)
        acknowledged = send_frames(sender, 3, 0)
        assert future.result(timeout=5) == acknowledged
    assert len(acknowledged) == 3


def test_sender_ignores_non_ack():
    sender, peer = socket.socketpair()

    def nak():
        frame = _recv_exact(peer, 19)
        peer.sendall(b"nak".ljust(19, b"\0"))
        return frame

    with sender, peer, ThreadPoolExecutor(1) as pool:
        future = pool.submit(nak)
        acknowledged = send_frames(sender, 1, 0)
        assert future.result(timeout=5).startswith(b"frame")
    assert acknowledged == []


def test_receiver_rejects_garbage_but_acks():
    peer, receiver = socket.socketpair()
    with peer, receiver:
        peer.sendall(b"junk".ljust(19, b"\0"))
        received = receive_frames(receiver, 1)
        reply = _recv_exact(peer, 19)
    assert received == []
    assert reply.startswith(b"ack")


def test_zero_frames():
    sender, receiver = socket.socketpair()
    with sender, receiver:
        assert send_frames(sender, 0, 0) == []
        assert receive_frames(receiver, 0) == []