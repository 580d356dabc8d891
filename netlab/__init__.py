"""Small networking exercises: routing, traffic shaping, socket chat, file transfer and ARQ protocols."""

__version__ = "0.1.0"

__all__ = [
    "routing",
    "leaky_bucket",
    "tcp_chat",
    "udp_chat",
    "ftp",
    "stop_and_wait",
    "go_back_n",
    "selective_repeat",
]