"""Distance-vector routing tables computed from a link-cost matrix."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from itertools import product


@dataclass(frozen=True)
class Route:
    """One routing-table entry: the next hop and total cost to a destination."""

    destination: int
    via: int
    distance: int


def compute_routes(costs: Sequence[Sequence[int]]) -> list[list[Route]]:
    """Relax every router's table until no entry improves.

    ``costs[i][j]`` is the cost of the direct link from router ``i`` to ``j``;
    the diagonal is always treated as zero. Returns one table per router,
    indexed by destination, with zero-based router numbers.
    """
    matrix = [list(row) for row in costs]
    size = len(matrix)
    if any(len(row) != size for row in matrix):
        raise ValueError("cost matrix must be square")
    for index, row in enumerate(matrix):
        row[index] = 0
        if any(cost < 0 for cost in row):
            raise ValueError("link costs must not be negative")

    dist = [row[:] for row in matrix]
    via = [list(range(size)) for _ in range(size)]

    changed = True
    while changed:
        changed = False
        for i, j, k in product(range(size), repeat=3):
            if dist[i][j] > matrix[i][k] + dist[k][j]:
                dist[i][j] = dist[i][k] + dist[k][j]
                via[i][j] = k
                changed = True

    return [
        [Route(dest, hop, distance) for dest, (hop, distance) in enumerate(zip(hops, row))]
        for hops, row in zip(via, dist)
    ]


def format_routing_tables(tables: Iterable[Iterable[Route]]) -> str:
    """Render the tables as text, numbering routers from one."""
    parts = []
    for number, table in enumerate(tables, 1):
        parts.append(f"\nROUTING TABLE for {number}st router\n")
        parts.extend(
            f"node {route.destination + 1} via {route.via + 1} -> Distance is {route.distance}\n"
            for route in table
        )
    parts.append("\n\n")
    return "".join(parts)


def _tokens(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def main(argv=None) -> int:
    """Read a node count and cost matrix from standard input and print the tables."""
    parser = argparse.ArgumentParser(
        prog="netlab-routing",
        description="Compute distance-vector routing tables from a cost matrix read on stdin.",
    )
    parser.parse_args(argv)

    tokens = _tokens(sys.stdin)
    try:
        print("Enter the no.of nodes:", end="", flush=True)
        count = int(next(tokens))
        print("\nEnter the cost matrix:")
        costs = [[int(next(tokens)) for _ in range(count)] for _ in range(count)]
        tables = compute_routes(costs)
    except StopIteration:
        print("error: not enough input", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(format_routing_tables(tables), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())