from typing import Any, Tuple

from ..stream import Stream


class Source:
    """Filter that ignores its input and pulls the next value from a Stream.

    Placed first in a pipeline, it ends the run with no value once the
    stream has nothing left, which ``Pipeline.stream`` treats as the end.
    """

    def __init__(self, stream: Stream, use_filler: bool = True):
        """Initialize the Source filter.

        Args:
            stream: Stream to pull values from
            use_filler: Let the stream refill through its fetch callback
        """
        if not isinstance(stream, Stream):
            raise TypeError(f"stream must be a Stream, got {type(stream).__name__}")
        self.stream = stream
        self.use_filler = use_filler

    def __call__(self, _: Any = None) -> Tuple[bool, Any]:
        if self.use_filler:
            return True, self.stream.recv()
        return True, self.stream.pop()


def source(stream: Stream, use_filler: bool = True) -> Source:
    """Create a source filter reading from ``stream``."""
    return Source(stream, use_filler)
