"""Leaky-bucket traffic shaping simulation."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class BucketStep:
    """What happened to one burst of incoming packets."""

    incoming: int
    dropped: int
    level: int
    remaining: int


@dataclass
class LeakyBucket:
    """A bucket of fixed capacity drained by a fixed rate after every arrival."""

    capacity: int
    rate: int
    level: int = 0

    def offer(self, packets: int) -> BucketStep:
        """Add a burst, dropping what does not fit, then drain the bucket once."""
        free = self.capacity - self.level
        if packets <= free:
            self.level += packets
            dropped = 0
        else:
            dropped = packets - free
            self.level = self.capacity
        filled = self.level
        self.level -= self.rate
        return BucketStep(packets, dropped, filled, self.level)


def simulate(capacity: int, rate: int, arrivals: Iterable[int]) -> list[BucketStep]:
    """Run a fresh bucket over a sequence of arrivals."""
    bucket = LeakyBucket(capacity, rate)
    return [bucket.offer(packets) for packets in arrivals]


def _tokens(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _ask(prompt: str, tokens: Iterator[str]) -> int:
    print(prompt, end="", flush=True)
    return int(next(tokens))


def main(argv=None) -> int:
    """Prompt for bucket parameters and arrivals on stdin and report each step."""
    parser = argparse.ArgumentParser(
        prog="netlab-leaky-bucket",
        description="Simulate a leaky bucket with parameters read on stdin.",
    )
    parser.parse_args(argv)

    tokens = _tokens(sys.stdin)
    try:
        capacity = _ask("Enter the BucketSize:", tokens)
        count = _ask("Enter the no.of input:", tokens)
        rate = _ask("Outgoing rate:", tokens)
        bucket = LeakyBucket(capacity, rate)
        for _ in range(max(count, 0)):
            step = bucket.offer(_ask("Enter the incoming packet rate:", tokens))
            if step.dropped:
                print(f"Packet Dropped {step.dropped}:")
            print(f"Bucket contain {step.level} out of {capacity}:")
            print(f"After outgoing,Bucket contain {step.remaining} out of {capacity}:")
            print("\n")
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())