from __future__ import annotations

from abc import ABC, abstractmethod

from .encoder import Number
from .tags import Tags

NotImplementedErrorMsg = "Subclasses must implement this method."


class StatsDClient(ABC):
    """Capability set every statsd client offers."""

    @abstractmethod
    def count(self, aspect: str, delta: int, tags: Tags = (), sample_rate: float = 1.0) -> None:
        raise NotImplementedError(NotImplementedErrorMsg)

    @abstractmethod
    def increment(self, aspect: str, tags: Tags = (), sample_rate: float = 1.0) -> None:
        raise NotImplementedError(NotImplementedErrorMsg)

    @abstractmethod
    def decrement(self, aspect: str, tags: Tags = (), sample_rate: float = 1.0) -> None:
        raise NotImplementedError(NotImplementedErrorMsg)

    @abstractmethod
    def gauge(self, aspect: str, value: Number, tags: Tags = (), sample_rate: float = 1.0) -> None:
        raise NotImplementedError(NotImplementedErrorMsg)

    @abstractmethod
    def time(self, aspect: str, value_ms: Number, tags: Tags = (), sample_rate: float = 1.0) -> None:
        """Record an execution time in milliseconds."""
        raise NotImplementedError(NotImplementedErrorMsg)

    @abstractmethod
    def histogram(self, aspect: str, value: Number, tags: Tags = (), sample_rate: float = 1.0) -> None:
        raise NotImplementedError(NotImplementedErrorMsg)

    @abstractmethod
    def stop(self) -> None:
        """Release the connection to the daemon."""
        raise NotImplementedError(NotImplementedErrorMsg)
