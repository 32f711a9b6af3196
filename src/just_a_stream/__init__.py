"""
just-a-stream: a light weight library for creating, transforming and merging
push-based streams.

A stream wraps a producer function and re-runs it for every subscriber.
Operators such as filter, map and reduce build new streams lazily, so no
value flows until somebody subscribes.
"""

import logging

from just_a_stream.config import StreamConfig, StreamOptions
from just_a_stream.streams import Stream, BufferNotEnabledError, StreamOperator

__version__ = "1.0.3"
__author__ = "just-a-stream Contributors"
__license__ = "MIT"

__all__ = [
    "StreamConfig",
    "StreamOptions",
    "Stream",
    "BufferNotEnabledError",
    "StreamOperator",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Configure default settings
StreamConfig.set_defaults()
