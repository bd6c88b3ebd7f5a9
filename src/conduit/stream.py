"""Buffered FIFO stream with optional on-demand refill."""

from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class _Node(Generic[T]):
    """A buffered value and the node queued after it."""

    def __init__(self, value: T):
        self.value = value
        self.next: Optional["_Node[T]"] = None


class Stream(Generic[T]):
    """Buffered FIFO of values with optional on-demand refill.

    Values are kept in a singly linked list so both ends are O(1). When the
    buffer is empty, ``recv`` may call a fetch callback to produce more
    values: the callback gets the stream and either returns a value
    directly or sends values into the stream and returns None.

    ``None`` is the end-of-data signal. Receiving from an empty stream that
    cannot refill returns None, which is not an error.

    Example:
        >>> stream = Stream()
        >>> stream.send(1)
        >>> stream.send(2)
        >>> stream.recv(), stream.recv(), stream.recv()
        (1, 2, None)

    Attributes:
        len: Number of buffered values
        fetch: Optional refill callback, ``fetch(stream) -> value | None``
    """

    def __init__(self, fetch: Optional[Callable[["Stream[T]"], Optional[T]]] = None):
        """Initialize an empty Stream.

        Args:
            fetch: Callback invoked by ``recv`` when the buffer is empty

        Raises:
            TypeError: If fetch is given and not callable
        """
        if fetch is not None and not callable(fetch):
            raise TypeError(f"fetch must be callable, got {type(fetch).__name__}")

        self._head: Optional[_Node[T]] = None
        self._tail: Optional[_Node[T]] = None
        self.len = 0
        self.fetch = fetch

    @classmethod
    def from_iterable(
        cls,
        data: Iterable[T],
        fetch: Optional[Callable[["Stream[T]"], Optional[T]]] = None,
    ) -> "Stream[T]":
        """Create a stream buffering every item of an iterable."""
        stream = cls(fetch)
        for item in data:
            stream.send(item)
        return stream

    def send(self, value: T):
        """Append a value to the end of the stream."""
        node = _Node(value)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self.len += 1

    def pop(self) -> Optional[T]:
        """Take the oldest buffered value without refilling."""
        if self._head is None:
            return None
        node = self._head
        self._head = node.next
        if self._head is None:
            self._tail = None
        self.len -= 1
        return node.value

    def recv(self) -> Optional[T]:
        """Take the oldest value, refilling through ``fetch`` when empty.

        Returns:
            The next value, or None when no value is available
        """
        if self.len == 0 and self.fetch is not None:
            value = self.fetch(self)
            if value is not None:
                return value
        return self.pop()

    def iter(self, use_filler: bool = False) -> Iterator[T]:
        """Iterate over buffered values until one is None.

        The iterator consumes the stream and cannot be restarted.

        Args:
            use_filler: Refill through ``fetch`` when the buffer runs empty
        """
        take = self.recv if use_filler else self.pop
        while True:
            value = take()
            if value is None:
                return
            yield value

    def __iter__(self) -> Iterator[T]:
        return self.iter()

    def __len__(self) -> int:
        return self.len

    def __bool__(self) -> bool:
        return self.len > 0

    def __repr__(self) -> str:
        return f"Stream(len={self.len})"
