"""Tests for tracing parameters."""

import pytest

from bitmap_to_vector import InvalidParameterError, TraceParams, TurnPolicy


class TestTraceParams:
    """Test cases for parameter validation."""

    def test_defaults(self):
        """Test the documented defaults."""
        params = TraceParams()

        assert params.turdsize == 2
        assert params.turnpolicy == TurnPolicy.MINORITY
        assert params.alphamax == 1.0
        assert params.opticurve is True
        assert params.opttolerance == 0.2
        assert params.quantize_unit is None
        assert params.progress is None

    def test_integer_turnpolicy(self):
        """Test that classic integer policies are accepted."""
        assert TraceParams(turnpolicy=3).turnpolicy is TurnPolicy.RIGHT

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"turdsize": -1},
            {"turnpolicy": 42},
            {"turnpolicy": "sideways"},
            {"alphamax": -0.1},
            {"opttolerance": -1.0},
            {"quantize_unit": 0},
            {"quantize_unit": 0.5},
            {"quantize_unit": True},
            {"progress": "not callable"},
            {"progress_epsilon": -0.5},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test that out-of-range values are rejected."""
        with pytest.raises(InvalidParameterError):
            TraceParams(**kwargs)

    def test_invalid_is_value_error(self):
        """Test that parameter errors are also ValueErrors."""
        with pytest.raises(ValueError):
            TraceParams(turdsize=-3)

    def test_from_kwargs_rejects_unknown(self):
        """Test that unknown names are reported."""
        with pytest.raises(InvalidParameterError, match="alpha_max"):
            TraceParams.from_kwargs(alpha_max=1.0)

