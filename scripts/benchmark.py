#!/usr/bin/env python3
"""
Benchmark flow layout and orthogonal routing on generated diagrams.

Each diagram is laid out with FlowLayout, then every edge is routed with
OrthogonalRouter using the laid-out nodes as obstacles.

Usage:
    python scripts/benchmark.py [--sizes N,...] [--direction DIR] [--seed S]

Examples:
    python scripts/benchmark.py
    python scripts/benchmark.py --sizes 20,50,100 --direction LR
    python scripts/benchmark.py --sizes 200 --edge-factor 2 --output results.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from typing import Any

from diagram_layout import (
    FlowLayout,
    OrthogonalRouter,
    Rect,
    RouteRequest,
    count_bends,
)


def generate_diagram(
    num_nodes: int,
    edge_factor: float,
    seed: int,
) -> tuple[list[dict], list[dict]]:
    """Random flow diagram: mostly forward edges, a few back edges."""
    rng = random.Random(seed)
    nodes = [
        {
            "id": f"n{i}",
            "x": rng.uniform(0, 1000),
            "y": rng.uniform(0, 1000),
            "width": rng.choice([120, 160, 200]),
            "height": rng.choice([60, 80, 100]),
        }
        for i in range(num_nodes)
    ]
    edges = []
    for k in range(int(num_nodes * edge_factor)):
        a, b = rng.sample(range(num_nodes), 2)
        if rng.random() < 0.9:
            a, b = min(a, b), max(a, b)
        edges.append({"id": f"e{k}", "source_id": f"n{a}", "target_id": f"n{b}"})
    return nodes, edges


def benchmark_diagram(
    nodes: list[dict],
    edges: list[dict],
    direction: str,
) -> dict[str, Any]:
    """
    Time one layout-then-route pass.

    Returns:
        Dict with timings and route statistics
    """
    start = time.perf_counter()
    result = FlowLayout(direction=direction).run(nodes, edges)
    layout_time = time.perf_counter() - start

    rects = {}
    for n in nodes:
        pos = result.positions[n["id"]]
        rects[n["id"]] = Rect(pos.x, pos.y, n["width"], n["height"], n["id"])
    requests = [
        RouteRequest(e["id"], rects[e["source_id"]], rects[e["target_id"]]) for e in edges
    ]

    start = time.perf_counter()
    routes = OrthogonalRouter().route_all(requests, list(rects.values()))
    routing_time = time.perf_counter() - start

    found = [r for r in routes.values() if r.found]
    return {
        "num_nodes": len(nodes),
        "num_edges": len(edges),
        "num_layers": len(result.layer_order),
        "layout_seconds": layout_time,
        "routing_seconds": routing_time,
        "routes_found": len(found),
        "mean_bends": sum(count_bends(r.waypoints) for r in found) / len(found) if found else 0.0,
    }


def run_benchmarks(
    sizes: list[int],
    direction: str = "TB",
    edge_factor: float = 1.5,
    seed: int = 42,
) -> list[dict]:
    """Run the benchmark for each diagram size."""
    results = []

    print(f"\nBenchmarking {len(sizes)} diagram sizes, direction {direction}")
    print("=" * 80)
    print(
        f"{'Nodes':>7s}{'Edges':>7s}{'Layers':>8s}{'Layout':>10s}"
        f"{'Routing':>10s}{'Found':>8s}{'Bends':>8s}"
    )
    print("-" * 80)

    for size in sizes:
        nodes, edges = generate_diagram(size, edge_factor, seed)
        result = benchmark_diagram(nodes, edges, direction)
        results.append(result)
        print(
            f"{result['num_nodes']:>7d}{result['num_edges']:>7d}{result['num_layers']:>8d}"
            f"{result['layout_seconds']:>10.4f}{result['routing_seconds']:>10.4f}"
            f"{result['routes_found']:>8d}{result['mean_bends']:>8.2f}"
        )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark flow layout and orthogonal routing")
    parser.add_argument("--sizes", default="10,25,50,100", help="Comma-separated node counts")
    parser.add_argument("--direction", default="TB", help="Flow direction (TB, BT, LR, RL)")
    parser.add_argument("--edge-factor", type=float, default=1.5, help="Edges per node")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    results = run_benchmarks(
        sizes=[int(s) for s in args.sizes.split(",")],
        direction=args.direction,
        edge_factor=args.edge_factor,
        seed=args.seed,
    )

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
