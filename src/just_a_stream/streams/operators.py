"""
Stream operators for transformation.

An operator turns the downstream emission callback into the callback handed
to the upstream producer. ``bind`` is called once per subscription, so any
state an operator keeps lives in the closure it returns and is never shared
between subscriptions.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, TypeVar, Optional

T = TypeVar('T')
U = TypeVar('U')

Emit = Callable[[Any], None]


class StreamOperator(ABC):
    """Base class for stream operators."""

    @abstractmethod
    def bind(self, emit: Emit) -> Emit:
        """Return the upstream callback for one subscription."""
        pass


class MapOperator(StreamOperator):
    """Map each element to a new value."""

    def __init__(self, func: Callable[[T], U]):
        self.func = func

    def bind(self, emit: Emit) -> Emit:
        func = self.func

        def on_next(item):
            emit(func(item))

        return on_next


class FilterOperator(StreamOperator):
    """Filter elements by predicate."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def bind(self, emit: Emit) -> Emit:
        predicate = self.predicate

        def on_next(item):
            if predicate(item):
                emit(item)

        return on_next


class ReduceOperator(StreamOperator):
    """Running fold: emit the accumulator after every element."""

    def __init__(self, func: Callable[[U, T], U], initial: U):
        self.func = func
        self.initial = initial

    def bind(self, emit: Emit) -> Emit:
        func = self.func
        acc = self.initial

        def on_next(item):
            nonlocal acc
            acc = func(acc, item)
            emit(acc)

        return on_next


class FlatMapOperator(StreamOperator):
    """Map each element to multiple elements."""

    def __init__(self, func: Callable[[T], Iterable[U]]):
        self.func = func

    def bind(self, emit: Emit) -> Emit:
        func = self.func

        def on_next(item):
            result = func(item)
            if hasattr(result, '__iter__') and not isinstance(result, (str, bytes)):
                for value in result:
                    emit(value)
            else:
                emit(result)

        return on_next


class ChunkOperator(StreamOperator):
    """Group elements into fixed-size chunks."""

    def __init__(self, size: int):
        self.size = max(1, size)

    def bind(self, emit: Emit) -> Emit:
        size = self.size
        chunk: List[Any] = []

        def on_next(item):
            nonlocal chunk
            chunk.append(item)

            if len(chunk) >= size:
                full, chunk = chunk, []
                emit(full)

        return on_next


class WindowOperator(StreamOperator):
    """Sliding window over stream."""

    def __init__(self, size: int, slide: int = 1):
        self.size = max(1, size)
        self.slide = max(1, slide)

    def bind(self, emit: Emit) -> Emit:
        size = self.size
        slide = self.slide
        window: List[Any] = []

        def on_next(item):
            window.append(item)

            if len(window) >= size:
                snapshot = window.copy()

                # Slide window
                del window[:min(slide, len(window))]
                emit(snapshot)

        return on_next


class TakeWhileOperator(StreamOperator):
    """Take elements while predicate is true."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def bind(self, emit: Emit) -> Emit:
        predicate = self.predicate
        taking = True

        def on_next(item):
            nonlocal taking
            if not taking:
                return
            if predicate(item):
                emit(item)
            else:
                taking = False

        return on_next


class DropWhileOperator(StreamOperator):
    """Drop elements while predicate is true."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def bind(self, emit: Emit) -> Emit:
        predicate = self.predicate
        dropping = True

        def on_next(item):
            nonlocal dropping
            if dropping and predicate(item):
                return
            dropping = False
            emit(item)

        return on_next


class DistinctOperator(StreamOperator):
    """Remove duplicate elements."""

    def __init__(self, key_func: Optional[Callable[[T], Any]] = None):
        self.key_func = key_func or (lambda x: x)

    def bind(self, emit: Emit) -> Emit:
        key_func = self.key_func
        seen = set()

        def on_next(item):
            key = key_func(item)
            if key not in seen:
                seen.add(key)
                emit(item)

        return on_next


class TakeOperator(StreamOperator):
    """Take first n elements."""

    def __init__(self, n: int):
        self.n = n

    def bind(self, emit: Emit) -> Emit:
        n = self.n
        count = 0

        def on_next(item):
            nonlocal count
            if count >= n:
                return
            count += 1
            emit(item)

        return on_next


class SkipOperator(StreamOperator):
    """Skip first n elements."""

    def __init__(self, n: int):
        self.n = n

    def bind(self, emit: Emit) -> Emit:
        n = self.n
        count = 0

        def on_next(item):
            nonlocal count
            if count < n:
                count += 1
                return
            emit(item)

        return on_next


class TapOperator(StreamOperator):
    """Run a side effect for each element and pass it on unchanged."""

    def __init__(self, func: Callable[[T], Any]):
        self.func = func

    def bind(self, emit: Emit) -> Emit:
        func = self.func

        def on_next(item):
            func(item)
            emit(item)

        return on_next
