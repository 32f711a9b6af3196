#!/usr/bin/env python3
"""
Basic usage examples for just-a-stream.
"""

import logging
import threading
import time

from just_a_stream import Stream, StreamOptions, StreamConfig


def example_transformations():
    """Example: filter, map and reduce over a fixed sequence."""
    print("\n=== Transformation Example ===")

    numbers = Stream.from_iterable(range(1, 11))

    evens = numbers.filter(lambda x: x % 2 == 0)
    squares = evens.map(lambda x: x * x)
    running_total = squares.reduce(lambda acc, x: acc + x, 0)

    running_total.subscribe(lambda total: print(f"Running total: {total}"))
    print(f"Last total: {running_total.get_last()}")


def example_buffer():
    """Example: keep a bounded history of emitted values."""
    print("\n=== Buffer Example ===")

    stream = Stream(
        lambda emit: [emit(i) for i in range(1, 16)],
        StreamOptions(use_buffer=True, buffer_size=3),
    )
    stream.subscribe(lambda x: None)
    print(f"Buffer after 15 emissions: {stream.get_buffer()}")


def example_merge():
    """Example: merge several streams into one."""
    print("\n=== Merge Example ===")

    merged = Stream.merge(Stream.of(1, 2), Stream.of('a', 'b'))
    print(f"Merged values: {merged.collect()}")


def example_timer_producer():
    """Example: a producer driven by a host timer thread."""
    print("\n=== Timer Producer Example ===")

    # one timer thread per subscription
    workers = []

    def ticks(emit):
        def run():
            for i in range(5):
                time.sleep(0.05)
                emit(i)
        worker = threading.Thread(target=run, daemon=True)
        workers.append(worker)
        worker.start()

    clock = Stream(ticks)
    labels = Stream.of('tick')

    clock.with_latest_from(labels).subscribe(
        lambda pair: print(f"Pair: {pair}")
    )
    clock.map(lambda i: i * 100).subscribe(lambda ms: print(f"Elapsed: {ms} ms"))

    for worker in workers:
        worker.join(5)


def example_operators():
    """Example: supplementary operators."""
    print("\n=== Operators Example ===")

    words = Stream.of("stream", "map", "stream", "filter", "merge", "map")
    print(f"Distinct: {words.distinct().collect()}")
    print(f"Chunks of 2: {words.chunk(2).collect()}")
    print(f"Windows of 3: {Stream.range(5).window(3).collect()}")
    print(f"First three lengths: {words.map(len).take(3).collect()}")


def main():
    logging.basicConfig(level=logging.INFO)
    StreamConfig.set_defaults(trace_emissions=False)

    example_transformations()
    example_buffer()
    example_merge()
    example_timer_producer()
    example_operators()


if __name__ == "__main__":
    main()
