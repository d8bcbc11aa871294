"""Micro-benchmark for whole-file decode on synthetic function datasets."""

from __future__ import annotations

import time

from uffio.codec import decode_all, encode_all
from uffio.datasets.dataset58 import Dataset58


def synthetic_file(datasets: int = 200, points: int = 1024) -> bytes:
    records = [
        Dataset58(
            id1=f"Response {i}",
            rsp_node=i,
            num_pts=points,
            abscissa_inc=0.5,
            data=[float(j % 97) for j in range(points)],
        )
        for i in range(datasets)
    ]
    return ("\n".join(encode_all(records)) + "\n").encode("latin-1")


def benchmark_decode(datasets: int = 200, runs: int = 3) -> dict[str, float]:
    data = synthetic_file(datasets)
    total_bytes = len(data)
    best = None
    for _ in range(runs):
        start = time.perf_counter()
        decode_all(data)
        elapsed = time.perf_counter() - start
        best = elapsed if best is None or elapsed < best else best
    mbps = (total_bytes / 1_000_000) / best if best else 0.0
    return {"datasets": datasets, "bytes": total_bytes, "best_seconds": best or 0.0, "mbps": mbps}


if __name__ == "__main__":
    result = benchmark_decode()
    print(result)
