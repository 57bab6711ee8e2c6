"""
Lock contention performance sweep.

Runs concurrent increase/decrease/query callers against one logic unit at
1, 2, 4, 8 and 16 threads while the autonomous cycle ticks as fast as it
can, and reports median/p90 per-call latency.

Every call takes the single exclusive lock, so throughput is expected to
flatten as threads are added.
"""

import gc
import logging
import threading
import time
import numpy as np
from typing import List

from gascontainer.logic import GasContainerLogic
from gascontainer.state import GasContainerState
from gascontainer.rng import make_generator


def make_logic(seed: int = 42) -> GasContainerLogic:
    """Logic unit with limits wide enough that every call is applied."""
    state = GasContainerState(
        implosion_limit=-1e18,
        pressure_limit=1e15,
        upper_pressure_limit=-1e15,
        explosion_limit=1e18
    )
    return GasContainerLogic(state, rng=make_generator(seed, "temperature"), tick_interval_seconds=0.0)


def run_contention_test(thread_count: int, calls_per_thread: int = 2000) -> dict:
    """
    Run mixed callers at given thread count.

    Args:
        thread_count: Number of concurrent caller threads
        calls_per_thread: Operations issued by each thread

    Returns:
        Dict with p50, p90, max per-call latency and total throughput
    """
    logic = make_logic()
    barrier = threading.Barrier(thread_count + 1)
    latencies: List[List[int]] = [[] for _ in range(thread_count)]

    def caller(idx: int):
        ops = (logic.increase_mass, logic.decrease_mass)
        samples = latencies[idx]
        barrier.wait()
        for i in range(calls_per_thread):
            start = time.perf_counter_ns()
            if i % 3 == 2:
                logic.get_pressure()
            else:
                ops[i % 2](1.0)
            samples.append(time.perf_counter_ns() - start)

    threads = [threading.Thread(target=caller, args=(i,)) for i in range(thread_count)]
    for t in threads:
        t.start()

    # Measure (GC disabled for stable timing)
    gc.collect()
    gc.disable()
    logic.start()
    try:
        wall_start = time.perf_counter()
        barrier.wait()
        for t in threads:
            t.join()
        wall = time.perf_counter() - wall_start
    finally:
        logic.stop()
        gc.enable()

    # Statistics
    times_us = np.concatenate([np.array(s) for s in latencies]) / 1_000
    total_calls = thread_count * calls_per_thread

    return {
        'threads': thread_count,
        'calls': total_calls,
        'p50_us': np.percentile(times_us, 50),
        'p90_us': np.percentile(times_us, 90),
        'max_us': np.max(times_us),
        'calls_per_s': total_calls / wall,
        'ticks': logic.get_tick_stats()['tick_count']
    }


def main():
    """Run lock contention sweep."""
    # Silence per-call INFO records
    logging.basicConfig(level=logging.WARNING)

    print("=" * 80)
    print("Gas Container Lock Contention")
    print("=" * 80)
    print()

    results = []

    for thread_count in [1, 2, 4, 8, 16]:
        print(f"[threads = {thread_count}]")

        result = run_contention_test(thread_count)

        print(f"  p50: {result['p50_us']:.2f}us")
        print(f"  p90: {result['p90_us']:.2f}us")
        print(f"  max: {result['max_us']:.2f}us")
        print(f"  Throughput: {result['calls_per_s']:.0f} calls/s, concurrent ticks: {result['ticks']}")

        results.append(result)
        print()

    # Summary table
    print("=" * 80)
    print("Summary Table")
    print("=" * 80)
    print()
    print("| Threads | p50 (us) | p90 (us) | calls/s   | ticks  |")
    print("|---------|----------|----------|-----------|--------|")
    for r in results:
        print(f"| {r['threads']:7d} | {r['p50_us']:8.2f} | {r['p90_us']:8.2f} | {r['calls_per_s']:9.0f} | {r['ticks']:6d} |")

    print()
    print("=" * 80)


if __name__ == '__main__':
    main()
