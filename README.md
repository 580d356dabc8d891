# netlab

A collection of small networking exercises in plain Python, with no
dependencies beyond the standard library:

- **Distance-vector routing**: build a routing table for every router from a
  link-cost matrix (`netlab.routing`).
- **Leaky bucket**: traffic shaping with a fixed-size bucket drained at a
  constant rate after every arrival (`netlab.leaky_bucket`).
- **TCP and UDP chat**: one message each way between a client and a server
  (`netlab.tcp_chat`, `netlab.udp_chat`).
- **File transfer**: a client asks a server for a file by name and stores
  what it receives (`netlab.ftp`).
- **ARQ protocols** over a TCP connection:
  - stop-and-wait, where every odd-numbered frame and acknowledgement is
    treated as lost once and resent (`netlab.stop_and_wait`);
  - Go-Back-N and selective repeat, with a receiver that randomly drops or
    delays frames (`netlab.go_back_n`, `netlab.selective_repeat`).

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using it from Python

```python
from netlab.routing import compute_routes, format_routing_tables
from netlab.leaky_bucket import simulate

costs = [
    [0, 2, 7],
    [2, 0, 1],
    [7, 1, 0],
]
tables = compute_routes(costs)
print(format_routing_tables(tables))

for step in simulate(capacity=10, rate=3, arrivals=[4, 8, 2]):
    print(step)
```

`compute_routes` returns one list of `Route(destination, via, distance)` per
router, numbered from zero; the diagonal of the matrix is always taken as
zero, and a non-square matrix or a negative cost raises `ValueError`.
`format_routing_tables` renders them numbering routers from one.

`LeakyBucket.offer` feeds one burst into a bucket and returns a `BucketStep`
with the packets that came in, how many were dropped, the level after the
burst and the level left once the outgoing rate has drained it.

The socket modules expose plain functions:

- `tcp_chat` and `udp_chat`: `serve_once(host, port, respond)` waits for one
  message, replies with `respond(message)` and returns the message;
  `send_message(host, port, message)` returns the server's reply.
- `ftp`: `serve_once(host, port, delay)` and `serve_file(conn, delay)` answer
  one request, pausing `delay` seconds between records;
  `fetch(host, port, remote_name, local_path)` returns the number of bytes
  written and raises `RemoteFileError` when the server cannot open the file.
  File names must be shorter than 50 bytes.
- `stop_and_wait`: `send_frames(sock, frames, delay)` and
  `receive_frames(sock, frames)`.
- `go_back_n` and `selective_repeat`:
  `send_frames(sock, frame_count, window_size, timeout)` and
  `receive_frames(sock, rng, delay)`, where `rng` is anything with a
  `randrange` method, such as `random.Random`. `encode_frame` and
  `decode_frame` convert between text and the 80-byte NUL-padded records the
  two sides exchange.

## Commands

| Command                   | Exercise                    |
|---------------------------|-----------------------------|
| `netlab-routing`          | distance-vector routing     |
| `netlab-leaky-bucket`     | leaky bucket                |
| `netlab-tcp-chat`         | TCP client and server       |
| `netlab-udp-chat`         | UDP client and server       |
| `netlab-ftp`              | file transfer               |
| `netlab-stop-and-wait`    | stop-and-wait ARQ           |
| `netlab-go-back-n`        | Go-Back-N ARQ               |
| `netlab-selective-repeat` | selective repeat ARQ        |

`netlab-routing` reads a node count and then the cost matrix on standard
input; `netlab-leaky-bucket` reads the bucket size, the number of arrivals,
the outgoing rate and then each arrival.

The networked commands take the role first, `server` or `client`, and
`--host` and `--port` options. Start the server in one terminal and the
client in another:

```
netlab-tcp-chat server
netlab-tcp-chat client
```

- `netlab-tcp-chat`, `netlab-udp-chat`: default `127.0.0.1:2000`; the text to
  send is read from standard input.
- `netlab-ftp [--host H] [--port P] server [--delay SECONDS]` and
  `netlab-ftp client [REMOTE_NAME] [LOCAL_PATH]`; names that are not given
  are asked for. Default `127.0.0.1:2000`, delay 1 second.
- `netlab-stop-and-wait`: `--frames` (default 5) and `--delay` before each
  retransmission (default 3 seconds); default `127.0.0.1:2000`.
- `netlab-go-back-n`: `--frames`, `--window` (asked for when not given),
  `--timeout` (default 3 seconds), `--delay` (server pause, default 1
  second) and `--seed` for the server's random choices; default
  `127.0.0.1:2000`.
- `netlab-selective-repeat`: the same options; default port 8080, the server
  listens on `0.0.0.0` and the client connects to `127.0.0.1`.

## What it does not do

Every server handles a single client and a single exchange, then exits.
The file transfer is its own small record-based exchange, not the standard
FTP protocol, and it offers no listing, upload or authentication. The lost
frames and acknowledgements in the ARQ programs are simulated by the programs
themselves; nothing is lost on the actual connection.