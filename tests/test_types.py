"""Tests for the deq value model."""
import math
import pytest
from deq.types import (
    DeqType, DeqValue, INT64_MIN, INT64_MAX,
    deq_integer, deq_real, deq_string, deq_bool,
    wrap_int64, int_div, int_mod, shift_left, shift_right, real_div,
    render_real, parse_integer, parse_real, unescape, real_to_integer,
)


class TestValueCreation:
    def test_integer(self):
        v = deq_integer(42, 3)
        assert v.type == DeqType.INTEGER
        assert v.value == 42
        assert v.origin == 3

    def test_integer_wraps(self):
        assert deq_integer(INT64_MAX + 1, 0).value == INT64_MIN

    def test_real(self):
        v = deq_real(2, 0)
        assert v.type == DeqType.REAL
        assert isinstance(v.value, float)

    def test_string(self):
        assert deq_string("hi", 0).value == "hi"

    def test_bool(self):
        assert deq_bool(True, 0).value == 1
        assert deq_bool(False, 0).value == 0
        assert deq_bool(True, 0).type == DeqType.INTEGER

    def test_equality_ignores_origin(self):
        assert deq_integer(1, 0) == deq_integer(1, 5)
        assert deq_integer(1, 0) != deq_real(1.0, 0)


class TestRendering:
    def test_integer(self):
        assert str(deq_integer(-12, 0)) == "-12"

    def test_whole_real(self):
        assert str(deq_real(3.0, 0)) == "3"

    def test_fraction(self):
        assert render_real(0.1) == "0.1"
        assert render_real(1 / 3) == "0.333333"

    def test_large_real(self):
        assert render_real(1e20) == "1e+20"

    def test_special_reals(self):
        assert render_real(math.inf) == "inf"
        assert render_real(-math.inf) == "-inf"
        assert render_real(math.nan) == "nan"

    def test_trace(self):
        assert deq_integer(3, 0).trace() == "3(an integer)"
        assert deq_real(1.5, 0).trace() == "1.5(a real)"
        assert deq_string("x", 0).trace() == "x(a string)"

    def test_human_names(self):
        assert DeqType.INTEGER.human() == "an integer"
        assert DeqType.REAL.human() == "a real"
        assert DeqType.STRING.human(plural=True) == "strings"


class TestIntegerArithmetic:
    def test_wrap(self):
        assert wrap_int64(INT64_MAX + 1) == INT64_MIN
        assert wrap_int64(INT64_MIN - 1) == INT64_MAX
        assert wrap_int64(-5) == -5

    def test_div_truncates_toward_zero(self):
        assert int_div(7, 2) == 3
        assert int_div(-7, 2) == -3
        assert int_div(7, -2) == -3

    def test_mod_follows_dividend(self):
        assert int_mod(7, 3) == 1
        assert int_mod(-7, 2) == -1
        assert int_mod(7, -2) == 1

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            int_div(1, 0)
        with pytest.raises(ZeroDivisionError):
            int_mod(1, 0)

    def test_min_div_minus_one_wraps(self):
        assert int_div(INT64_MIN, -1) == INT64_MIN

    def test_shifts(self):
        assert shift_left(1, 4) == 16
        assert shift_left(1, 63) == INT64_MIN
        assert shift_left(1, 64) == 0
        assert shift_right(-16, 2) == -4
        assert shift_right(-1, 100) == -1

    def test_negative_shift(self):
        with pytest.raises(ValueError):
            shift_left(1, -1)
        with pytest.raises(ValueError):
            shift_right(1, -1)


class TestRealArithmetic:
    def test_division_by_zero_is_ieee(self):
        assert real_div(1.0, 0.0) == math.inf
        assert real_div(-1.0, 0.0) == -math.inf
        assert math.isnan(real_div(0.0, 0.0))

    def test_plain_division(self):
        assert real_div(1.0, 4.0) == 0.25


class TestParsing:
    def test_integer(self):
        assert parse_integer("-42") == -42

    def test_integer_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_integer("12abc")

    def test_integer_rejects_digit_separators(self):
        with pytest.raises(ValueError):
            parse_integer("1_000")

    def test_real_rejects_digit_separators(self):
        with pytest.raises(ValueError):
            parse_real("1_0.5")

    def test_real_forms(self):
        assert parse_real("1.") == 1.0
        assert parse_real(".5") == 0.5
        assert parse_real("-1e3") == -1000.0

    def test_integer_out_of_range(self):
        with pytest.raises(ValueError):
            parse_integer(str(INT64_MAX + 1))

    def test_real(self):
        assert parse_real("2.5") == 2.5
        with pytest.raises(ValueError):
            parse_real("abc")

    def test_unescape(self):
        assert unescape("a\\nb") == "a\nb"
        assert unescape('say \\"hi\\"') == 'say "hi"'
        assert unescape("back\\\\slash") == "back\\slash"
        assert unescape("keep \\q") == "keep \\q"

    def test_real_to_integer(self):
        assert real_to_integer(-2.7) == -2
        assert real_to_integer(2.7) == 2
        with pytest.raises(ValueError):
            real_to_integer(math.nan)
