"""Unit tests for the Result type and combine.

Run with: pytest tests/test_result.py -v
"""

import pytest

from rooms.domain import DomainFailure, FailureCode, TechnicalError, combine, failure, success

MISSING = DomainFailure(FailureCode.MISSING_REQUIRED_DATA, {"field": "name"})
OUT_OF_RANGE = DomainFailure(FailureCode.VALUE_OUT_OF_RANGE, {"field": "size"})


class TestResult:
    """Tests for Success and Failure."""

    def test_success_map_and_flat_map(self):
        """map transforms the value; flat_map chains another result."""
        result = success(2).map(lambda v: v * 3).flat_map(lambda v: success(v + 1))

        assert result.is_valid()
        assert result.value == 7

    def test_failure_short_circuits(self):
        """map and flat_map never call their function on a failure."""
        calls = []
        result = failure(MISSING).map(calls.append).flat_map(calls.append)

        assert result.invalid
        assert calls == []
        assert result.codes == ["MISSING_REQUIRED_DATA"]

    def test_flat_map_propagates_inner_failure(self):
        """A failing step ends the chain with its own failure."""
        result = success(1).flat_map(lambda _: failure(OUT_OF_RANGE)).map(lambda v: v + 1)

        assert result.failures == (OUT_OF_RANGE,)

    def test_fold(self):
        """fold picks the branch matching the outcome."""
        assert success(1).fold(lambda v: f"ok {v}", lambda f: "ko") == "ok 1"
        assert failure(MISSING).fold(lambda v: "ok", lambda f: len(f)) == 1

    def test_tap_runs_only_on_success(self):
        """tap sees the value of a success and returns the same result."""
        seen = []
        ok = success("x")

        assert ok.tap(seen.append) is ok
        failure(MISSING).tap(seen.append)
        assert seen == ["x"]

    def test_value_of_failure_raises(self):
        """Reading the value of a failure is a programming error."""
        with pytest.raises(TechnicalError):
            failure(MISSING).value

    def test_failure_message(self):
        """Failures carry a readable message for their code."""
        assert MISSING.message == "Required data is missing"
        assert str(MISSING).startswith("MISSING_REQUIRED_DATA")


class TestCombine:
    """Tests for combine."""

    def test_mapping_of_successes_yields_dict(self):
        """Successful mappings produce a dict of values under the same keys."""
        result = combine({"a": success(1), "b": success("two")})

        assert result.value == {"a": 1, "b": "two"}

    def test_sequence_of_successes_yields_list(self):
        """Successful sequences produce a list in input order."""
        assert combine([success(1), success(2)]).value == [1, 2]

    def test_collects_every_failure_in_order(self):
        """All failures are reported, not just the first one."""
        result = combine({"a": failure(MISSING), "b": success(1), "c": failure(OUT_OF_RANGE)})

        assert result.codes == ["MISSING_REQUIRED_DATA", "VALUE_OUT_OF_RANGE"]

    def test_invalid_input_raises(self):
        """Anything other than a mapping or sequence is rejected."""
        with pytest.raises(TechnicalError) as exc:
            combine(success(1))

        assert exc.value.code is FailureCode.INVALID_COMBINE_INPUT
