import conduit as c


def square(x):
    return True, x * x


def test_map_replaces_in_place():
    """Test map mutates and returns the same sequence"""
    items = [1, 2, 3]
    ok, result = c.map(square)(items)

    assert ok
    assert result is items
    assert items == [1, 4, 9]


def test_map_empty_sequence():
    """Test mapping over nothing succeeds"""
    assert c.map(square)([]) == (True, [])


def test_map_with_lookup_table():
    """Test a mapping used as the inner filter"""
    names = {1: "one", 2: "two"}
    assert c.map(names)([2, 1]) == (True, ["two", "one"])


def test_map_stops_on_first_failure():
    """Test the first failing element aborts the map"""
    seen = []

    def positive(x):
        seen.append(x)
        if x < 0:
            return False, "negative"
        return True, x

    items = [1, -2, 3]
    ok, message = c.map(positive)(items)

    assert not ok
    assert message.startswith("While trying to map over [1, -2, 3][1]: negative")
    assert seen == [1, -2]


def test_map_failure_without_message():
    """Test placeholder text for failures without a message"""
    ok, message = c.map(lambda x: (False, None))([1])
    assert not ok
    assert message.endswith("no error message returned")


def test_map_requires_input():
    """Test mapping over None fails"""
    assert c.map(square)(None) == (False, "Expected a sequence to map over.")


def test_map_in_pipeline_reports_position():
    """Test a failing map inside a pipeline"""
    pipeline = c.Pipeline([c.map({1: "one"})])
    assert pipeline.run([1, 2], allow_fail=True) is None
