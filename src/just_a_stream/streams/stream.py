"""
Push-based cold streams.

A stream wraps a producer: a callable that receives an emission callback and
invokes it any number of times, synchronously or from a host facility such as
a timer thread. Operators wrap the producer lazily and nothing runs until
``subscribe`` is called. Every subscription re-runs the whole producer chain.
"""

import logging
import threading
from typing import (
    Any, Callable, Generic, Iterable, List, Optional, Tuple, TypeVar
)

from just_a_stream.config import config, StreamOptions
from just_a_stream.streams.operators import (
    StreamOperator, MapOperator, FilterOperator, ReduceOperator,
    FlatMapOperator, ChunkOperator, WindowOperator, TakeOperator,
    SkipOperator, TakeWhileOperator, DropWhileOperator, DistinctOperator,
    TapOperator,
)

T = TypeVar('T')
U = TypeVar('U')

Listener = Callable[[T], None]
Producer = Callable[[Callable[[T], None]], None]

logger = logging.getLogger(__name__)


class BufferNotEnabledError(RuntimeError):
    """Raised by ``get_buffer()`` on a stream built without buffering."""

    def __init__(self):
        super().__init__(
            "Buffering is disabled for this stream; construct it with "
            "StreamOptions(use_buffer=True, buffer_size=N) to use get_buffer()"
        )


class Stream(Generic[T]):
    """
    A lazy, cold, push-based stream of values.
    """

    def __init__(self, producer: Producer, options: Any = None):
        """
        Initialize stream.

        Args:
            producer: Callable taking an emission callback
            options: StreamOptions, a mapping of option names, or None for the
                configured defaults
        """
        if not callable(producer):
            raise TypeError("Producer must be callable")

        self._producer = producer
        self._options: StreamOptions = config.resolve_options(options)

        self._last: Optional[T] = None
        self._has_emitted = False
        self._buffer: List[T] = []
        self._lock = threading.RLock() if config.thread_safe else None

    @property
    def use_buffer(self) -> bool:
        return self._options.use_buffer

    @property
    def buffer_size(self) -> int:
        return self._options.buffer_size

    @property
    def has_emitted(self) -> bool:
        """True once a value has been delivered through ``subscribe``."""
        return self._has_emitted

    def subscribe(self, listener: Listener) -> None:
        """
        Run the producer once, delivering each emission to ``listener``.

        The last value and buffer are updated before the listener sees the
        emission. Exceptions raised by the producer or the listener propagate
        to the caller.
        """
        trace = config.trace_emissions
        logger.debug(f"Subscribing to {self!r}")

        def on_next(value):
            if self._lock is not None:
                with self._lock:
                    self._record(value)
            else:
                self._record(value)
            if trace:
                logger.debug(f"{self!r} emitted {value!r}")
            listener(value)

        self._producer(on_next)

    def _record(self, value: T) -> None:
        self._last = value
        self._has_emitted = True
        if self._options.use_buffer:
            self._buffer.append(value)
            self._buffer = self._buffer[-self._options.buffer_size:]

    def for_each(self, func: Listener) -> None:
        """Apply function to each element."""
        self.subscribe(func)

    # Transformation operators

    def pipe(self, operator: StreamOperator) -> 'Stream[Any]':
        """Return a new stream applying ``operator`` to each emission."""
        producer = self._producer

        def derived(emit):
            producer(operator.bind(emit))

        return Stream(derived)

    def filter(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Keep only elements matching predicate."""
        return self.pipe(FilterOperator(predicate))

    def map(self, func: Callable[[T], U]) -> 'Stream[U]':
        """Apply function to each element."""
        return self.pipe(MapOperator(func))

    def reduce(self, func: Callable[[U, T], U], initial: U) -> 'Stream[U]':
        """
        Running fold over the stream.

        Emits the accumulated value after every element. Each subscription
        starts again from ``initial``, which is never emitted on its own.
        """
        return self.pipe(ReduceOperator(func, initial))

    def flat_map(self, func: Callable[[T], Iterable[U]]) -> 'Stream[U]':
        """Map each element to multiple elements."""
        return self.pipe(FlatMapOperator(func))

    def chunk(self, size: int) -> 'Stream[List[T]]':
        """Group elements into chunks of ``size``."""
        return self.pipe(ChunkOperator(size))

    def window(self, size: int, slide: int = 1) -> 'Stream[List[T]]':
        """Sliding windows of ``size`` elements."""
        return self.pipe(WindowOperator(size, slide))

    def take(self, n: int) -> 'Stream[T]':
        """Take first n elements."""
        return self.pipe(TakeOperator(n))

    def skip(self, n: int) -> 'Stream[T]':
        """Skip first n elements."""
        return self.pipe(SkipOperator(n))

    def take_while(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        return self.pipe(TakeWhileOperator(predicate))

    def drop_while(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        return self.pipe(DropWhileOperator(predicate))

    def distinct(self, key: Optional[Callable[[T], Any]] = None) -> 'Stream[T]':
        """Remove duplicate elements."""
        return self.pipe(DistinctOperator(key))

    def tap(self, func: Callable[[T], Any]) -> 'Stream[T]':
        return self.pipe(TapOperator(func))

    def with_latest_from(self, other: 'Stream[U]') -> 'Stream[Tuple[Optional[T], Optional[U]]]':
        """
        Pair each emission with the latest value seen on ``other``.

        Subscribing to the result subscribes to ``other`` first, then runs
        this stream's producer. Each emission yields
        ``(self.get_last(), latest)``, where ``latest`` is None until ``other``
        has emitted. This stream's own last value is read, not updated.
        """
        producer = self._producer

        def combined(emit):
            latest = None

            def track(value):
                nonlocal latest
                latest = value

            logger.debug(f"{self!r} tracking latest value of {other!r}")
            other.subscribe(track)

            def on_next(value):
                emit((self.get_last(), latest))

            producer(on_next)

        return Stream(combined)

    # Inspection

    def get_last(self) -> Optional[T]:
        """Last value delivered through ``subscribe``, or None."""
        return self._last

    def get_buffer(self) -> List[T]:
        """Most recent ``buffer_size`` values, oldest first."""
        if not self._options.use_buffer:
            raise BufferNotEnabledError()
        return list(self._buffer)

    # Terminal operators

    def collect(self) -> List[T]:
        """
        Subscribe once and return the values emitted synchronously.

        Emissions a producer delivers after ``subscribe`` returns are not
        included.
        """
        items: List[T] = []
        self.subscribe(items.append)
        return items

    # Factory methods

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'Stream[T]':
        """Create a stream replaying ``iterable`` on every subscription."""
        if iter(iterable) is iterable:
            iterable = tuple(iterable)

        def producer(emit):
            for item in iterable:
                emit(item)

        return cls(producer)

    @classmethod
    def of(cls, *values: T) -> 'Stream[T]':
        """Create stream from the given values."""
        return cls.from_iterable(values)

    @classmethod
    def range(cls, *args) -> 'Stream[int]':
        """Create stream of integers."""
        return cls.from_iterable(range(*args))

    @staticmethod
    def merge(*streams: 'Stream[T]') -> 'Stream[T]':
        """
        Merge streams into one.

        Inputs are subscribed left to right with the same downstream callback.
        A synchronous input delivers all its values before the next input is
        subscribed.
        """
        for stream in streams:
            if not isinstance(stream, Stream):
                raise TypeError(f"Cannot merge {type(stream).__name__}, expected Stream")

        def producer(emit):
            logger.debug(f"Merging {len(streams)} streams")
            for stream in streams:
                stream.subscribe(emit)

        return Stream(producer)

    def __repr__(self) -> str:
        if self._options.use_buffer:
            return f"Stream(buffer_size={self._options.buffer_size})"
        return "Stream()"
