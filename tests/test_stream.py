import pytest

import conduit as c


def test_send_recv_is_fifo():
    """Test: send(a); send(b); recv() -> a, b, None"""
    stream = c.Stream()
    stream.send("a")
    stream.send("b")

    assert len(stream) == 2
    assert stream.recv() == "a"
    assert stream.recv() == "b"
    assert stream.recv() is None
    assert len(stream) == 0


def test_send_after_drain():
    """Test the stream is reusable after being emptied"""
    stream = c.Stream()
    stream.send(1)
    assert stream.recv() == 1
    stream.send(2)
    stream.send(3)
    assert [stream.recv(), stream.recv()] == [2, 3]


def test_filler_enqueues_value():
    """Test a filler that sends a value and returns None"""
    calls = []

    def fill(stream):
        calls.append(stream)
        stream.send("fresh")
        return None

    stream = c.Stream(fill)
    assert stream.recv() == "fresh"
    assert len(calls) == 1
    assert calls[0] is stream
    assert len(stream) == 0


def test_filler_returns_value_directly():
    """Test a filler's return value is handed out without buffering"""
    stream = c.Stream(lambda s: 42)
    assert stream.recv() == 42
    assert len(stream) == 0


def test_filler_with_nothing_left():
    """Test a filler that produces nothing ends the data"""
    stream = c.Stream(lambda s: None)
    assert stream.recv() is None


def test_filler_not_called_when_buffered():
    """Test the filler only runs on an empty buffer"""
    calls = []
    stream = c.Stream(lambda s: calls.append(s))
    stream.send(1)
    assert stream.recv() == 1
    assert calls == []


def test_iter_without_filler():
    """Test iteration drains buffered values only"""
    stream = c.Stream(lambda s: "never")
    stream.send(1)
    stream.send(2)

    assert list(stream.iter()) == [1, 2]
    assert list(stream) == []


def test_iter_with_filler():
    """Test iteration refills until the filler is exhausted"""
    batches = [[1, 2], [3]]

    def fill(stream):
        if batches:
            for item in batches.pop(0):
                stream.send(item)
        return None

    stream = c.Stream(fill)
    assert list(stream.iter(use_filler=True)) == [1, 2, 3]


def test_iter_is_single_pass():
    """Test an iterator is consumed once"""
    stream = c.Stream.from_iterable([1, 2])
    values = stream.iter()
    assert list(values) == [1, 2]
    assert list(values) == []


def test_iter_stops_at_buffered_none():
    """Test a None value ends iteration"""
    stream = c.Stream.from_iterable([1, None, 2])
    assert list(stream) == [1]
    assert stream.recv() == 2


def test_bool_reflects_buffer():
    """Test truthiness follows the buffered count"""
    stream = c.Stream()
    assert not stream
    stream.send(0)
    assert stream


def test_fetch_must_be_callable():
    """Test the fetch callback is validated"""
    with pytest.raises(TypeError, match="fetch must be callable"):
        c.Stream("not callable")


def test_source_filter_without_filler():
    """Test a source that does not refill"""
    stream = c.Stream.from_iterable([5], fetch=lambda s: 99)
    pipeline = c.Pipeline([c.source(stream, use_filler=False)])

    assert pipeline.run() == 5
    assert pipeline.run() is None


def test_source_filter_requires_stream():
    """Test source() only accepts a Stream"""
    with pytest.raises(TypeError, match="stream must be a Stream"):
        c.source([1, 2, 3])
