"""Push-based cold streams and their operators."""

from just_a_stream.streams.stream import (
    Stream,
    BufferNotEnabledError,
)
from just_a_stream.streams.operators import (
    StreamOperator,
    MapOperator,
    FilterOperator,
    ReduceOperator,
    FlatMapOperator,
    ChunkOperator,
    WindowOperator,
    TakeOperator,
    SkipOperator,
    TakeWhileOperator,
    DropWhileOperator,
    DistinctOperator,
    TapOperator,
)

__all__ = [
    "Stream",
    "BufferNotEnabledError",
    "StreamOperator",
    "MapOperator",
    "FilterOperator",
    "ReduceOperator",
    "FlatMapOperator",
    "ChunkOperator",
    "WindowOperator",
    "TakeOperator",
    "SkipOperator",
    "TakeWhileOperator",
    "DropWhileOperator",
    "DistinctOperator",
    "TapOperator",
]
