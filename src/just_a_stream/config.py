"""
Configuration management for streams.
"""

import logging
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

# camelCase spellings accepted in option mappings
_OPTION_ALIASES = {
    "useBuffer": "use_buffer",
    "bufferSize": "buffer_size",
}


@dataclass
class StreamOptions:
    """Per-stream options, fixed at construction."""
    use_buffer: bool = False
    buffer_size: int = 1

    def __post_init__(self):
        """Clamp buffer size to at least one element."""
        if self.buffer_size < 1:
            logger.warning(
                f"buffer_size={self.buffer_size} is below 1, using 1 instead"
            )
            self.buffer_size = 1

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> 'StreamOptions':
        """Build options from a mapping with snake_case or camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


@dataclass
class StreamConfig:
    """Global configuration for streams."""

    # Defaults for streams built without options
    use_buffer: bool = False
    buffer_size: int = 1

    # Guard last value / buffer updates with a lock
    thread_safe: bool = True

    # Debug-log every emission delivered through subscribe()
    trace_emissions: bool = False

    _instance: Optional['StreamConfig'] = None

    @classmethod
    def get_instance(cls) -> 'StreamConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    @classmethod
    def reset(cls) -> None:
        """Restore every setting to its default value."""
        instance = cls.get_instance()
        fresh = cls()
        for f in fields(cls):
            if f.name.startswith('_'):
                continue
            setattr(instance, f.name, getattr(fresh, f.name))

    def default_options(self) -> StreamOptions:
        """Options used by streams constructed without explicit options."""
        return StreamOptions(use_buffer=self.use_buffer, buffer_size=self.buffer_size)

    def resolve_options(self, options: Any = None) -> StreamOptions:
        """Normalize the ``options`` argument of ``Stream``."""
        if options is None:
            return self.default_options()
        if isinstance(options, StreamOptions):
            return options
        if isinstance(options, Mapping):
            return StreamOptions.from_mapping(options)
        raise TypeError(
            f"options must be StreamOptions, a mapping or None, not {type(options).__name__}"
        )


# Global configuration instance
config = StreamConfig.get_instance()
