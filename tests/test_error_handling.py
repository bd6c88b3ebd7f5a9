"""Tests for error handling functionality."""
import pytest

import conduit as c
from conduit import ErrorPolicy, PipelineError


def failing_function(x):
    if x == 2:
        return False, f"Intentional error for x={x}"
    return True, x * 2


def test_fail_fast_policy_raises():
    """Test that fail-fast raises the annotated message"""
    pipeline = c.Pipeline([failing_function], error_policy=ErrorPolicy.FAIL_FAST)

    with pytest.raises(PipelineError) as exc_info:
        pipeline.run(2)

    assert str(exc_info.value) == "Filter no. 1 failed: Intentional error for x=2"
    assert exc_info.value.message == str(exc_info.value)


def test_ignore_policy_returns_none():
    """Test that ignore policy turns failures into None"""
    pipeline = c.Pipeline([failing_function], error_policy=ErrorPolicy.IGNORE)

    assert pipeline.run(2) is None
    assert pipeline.run(3) == 6


def test_allow_fail_overrides_fail_fast():
    """Test run(..., allow_fail=True) does not raise"""
    pipeline = c.Pipeline([lambda x: (True, x), lambda x: (True, None), lambda x: (True, x)])
    assert pipeline.run(1, allow_fail=True) is None


def test_error_hierarchy():
    """Test the error taxonomy"""
    assert issubclass(c.ConfigurationError, PipelineError)
    assert issubclass(c.FilterFailure, PipelineError)
    assert issubclass(c.ProtocolViolation, c.FilterFailure)


def test_lookup_miss_is_filter_failure():
    """Test table misses are filter failures with the lookup message"""
    pipeline = c.Pipeline([{"a": 1}])
    with pytest.raises(c.FilterFailure, match=c.LOOKUP_MISS) as exc_info:
        pipeline.run("b")
    assert not isinstance(exc_info.value, c.ProtocolViolation)


def test_configuration_errors_are_not_swallowed():
    """Test allow_fail only covers failures of a run"""
    with pytest.raises(c.ConfigurationError):
        c.Pipeline([])


def test_ignore_policy_also_covers_empty_pipeline_run():
    """Test a staged empty pipeline under IGNORE returns None"""
    pipeline = c.Pipeline([], allow_empty=True, error_policy=ErrorPolicy.IGNORE)
    assert pipeline.run(1) is None


def test_failure_is_logged(caplog):
    """Test failed runs are logged at debug level"""
    caplog.set_level("DEBUG", logger="conduit")
    c.Pipeline([failing_function]).run(2, allow_fail=True)
    assert "Pipeline run failed: Filter no. 1 failed" in caplog.text
