from abc import ABC, abstractmethod
import typing as t


F = t.TypeVar("F", bound=t.Callable[..., t.Any])

class ITracer(ABC):
    @staticmethod
    @abstractmethod
    def start_span(name: str):
        """Returns span context manager"""

    @staticmethod
    @abstractmethod
    def get_trace_id(span) -> int:
        """Extracts trace_id from the span"""

    @staticmethod
    @abstractmethod
    def traced(func: F) -> F:
        """
        Decorator that wraps a function in a span named after its qualname.
        Implementations must support both sync and async functions.
        """
