"""Tests for hdrcolor.core.color — arithmetic, display conversion, hex parsing."""

import math
from fractions import Fraction

import numpy as np
import pytest
from hdrcolor.core.color import (
    BLACK,
    PINK,
    YELLOW,
    Color,
    ColorError,
    ColorParseError,
    TruncatedInputError,
    parse_hex_color,
    to_display,
    unmarshal_text,
)

SAMPLES = [
    Color(0.0, 0.0, 0.0),
    Color(0.25, 0.5, 0.75),
    Color(-1.0, 2.5, 0.1),
    Color(10.0, -3.0, 1e-6),
]


class TestConstants:
    def test_black(self):
        assert BLACK == Color(0, 0, 0)

    def test_pink(self):
        assert PINK == Color(1, 0, 0.5)

    def test_yellow(self):
        assert YELLOW == Color(0.5, 0.5, 0)


class TestArithmetic:
    @pytest.mark.parametrize('a', SAMPLES)
    @pytest.mark.parametrize('b', SAMPLES)
    def test_add_commutes(self, a, b):
        assert a.add(b) == b.add(a)

    @pytest.mark.parametrize('a', SAMPLES)
    def test_add_black_is_identity(self, a):
        assert a.add(BLACK) == a
        assert a + BLACK == a

    def test_add_is_component_wise(self):
        assert Color(1, 2, 3) + Color(0.5, -2, 10) == Color(1.5, 0, 13)

    def test_add_unbounded(self):
        c = Color(0.8, 0.8, 0.8) + Color(0.8, 0.8, 0.8)
        assert c.r == pytest.approx(1.6)

    def test_mul_is_component_wise(self):
        assert Color(2, 3, 4).mul(Color(0.5, -1, 0)) == Color(1, -3, 0)
        assert Color(2, 3, 4) * Color(0.5, -1, 0) == Color(1, -3, 0)

    @pytest.mark.parametrize('a', SAMPLES)
    def test_mul_white_is_identity(self, a):
        assert a.mul(Color(1, 1, 1)) == a

    @pytest.mark.parametrize('a', SAMPLES)
    def test_scale_composes(self, a):
        f, g = 0.3, 7.0
        got = a.scale(f).scale(g)
        want = a.scale(f * g)
        assert tuple(got) == pytest.approx(tuple(want))

    def test_scalar_operators(self):
        assert PINK * 2 == Color(2, 0, 1)
        assert 2 * PINK == Color(2, 0, 1)
        assert PINK * 0.5 == PINK.scale(0.5)

    def test_numeric_tower_scalars(self):
        assert PINK * np.float32(2) == Color(2, 0, 1)
        assert isinstance(PINK * np.float32(2), Color)
        assert PINK * Fraction(1, 2) == Color(0.5, 0, 0.25)
        assert Fraction(1, 2) * PINK == Color(0.5, 0, 0.25)

    def test_operations_return_new_values(self):
        a = Color(1, 2, 3)
        a.add(Color(1, 1, 1))
        a.scale(3)
        assert a == Color(1, 2, 3)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PINK.r = 0.0  # type: ignore[misc]

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            PINK + 1  # type: ignore[operator]

    def test_hashable(self):
        assert len({Color(1, 0, 0.5), PINK}) == 1


class TestDisplay:
    def test_clamps_both_ends(self):
        assert Color(-1, 0.5, 2).rgba() == (0, 127, 255, 1)

    def test_alpha_is_always_one(self):
        for c in SAMPLES:
            assert c.rgba()[3] == 1

    def test_truncates(self):
        # 0.999 * 255 = 254.745
        assert Color(0.999, 0.999, 0.999).rgba()[:3] == (254, 254, 254)

    def test_nan_is_zero(self):
        assert Color(math.nan, 1, 0).rgba() == (0, 255, 0, 1)

    def test_infinities(self):
        assert Color(math.inf, -math.inf, 0).rgba() == (255, 0, 0, 1)

    def test_free_function(self):
        assert to_display(YELLOW) == YELLOW.rgba() == (127, 127, 0, 1)

    def test_in_gamut(self):
        assert PINK.in_gamut()
        assert not Color(1.01, 0, 0).in_gamut()
        assert not Color(0, -0.01, 0).in_gamut()


class TestParseHexColor:
    def test_white(self):
        assert parse_hex_color('#ffffff') == Color(1, 1, 1)

    def test_black(self):
        assert parse_hex_color('#000000') == Color(0, 0, 0)

    def test_channels(self):
        assert parse_hex_color('#ff0080') == Color(1.0, 0.0, 128 / 255)

    def test_short_hex_expands(self):
        assert parse_hex_color('#fff') == parse_hex_color('#ffffff')
        assert parse_hex_color('abc') == parse_hex_color('aabbcc')

    def test_no_hash(self):
        assert parse_hex_color('ff0000') == Color(1, 0, 0)

    def test_uppercase(self):
        assert parse_hex_color('#FF0080') == parse_hex_color('#ff0080')

    def test_bad_digits(self):
        with pytest.raises(ColorParseError):
            parse_hex_color('xyz')

    @pytest.mark.parametrize('text', ['', '#', '#ff', '#ffff', '#fffffff', '#ffffffff', '##fff'])
    def test_bad_length(self, text):
        with pytest.raises(ColorParseError):
            parse_hex_color(text)

    @pytest.mark.parametrize('text', ['0xffff', '+fffff', ' fffff', 'ff_fff', '-00001'])
    def test_rejects_int_literal_extras(self, text):
        with pytest.raises(ColorParseError):
            parse_hex_color(text)

    def test_error_carries_string_without_hash(self):
        with pytest.raises(ColorParseError) as exc:
            parse_hex_color('#abcd')
        assert exc.value.text == 'abcd'
        assert 'abcd' in str(exc.value)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_hex_color('nothex')

    def test_to_hex_round_trips(self):
        for text in ('#ff0080', '#000000', '#123abc', '#fefefe'):
            assert parse_hex_color(text).to_hex() == text

    def test_to_hex_clamps(self):
        assert Color(-1, 0.5, 9).to_hex() == '#0080ff'


class TestUnmarshalText:
    def test_quoted(self):
        assert unmarshal_text(b'"#abc"') == parse_hex_color('#abc')

    def test_bare(self):
        assert unmarshal_text(b'#abc') == parse_hex_color('#abc')

    def test_str_input(self):
        assert unmarshal_text('"ff0080"') == parse_hex_color('ff0080')

    def test_classmethod(self):
        assert Color.from_text(b'"#fff"') == Color(1, 1, 1)

    def test_too_short(self):
        with pytest.raises(TruncatedInputError):
            unmarshal_text(b'a')

    def test_empty(self):
        with pytest.raises(TruncatedInputError):
            unmarshal_text(b'')

    def test_lone_quote(self):
        with pytest.raises(TruncatedInputError):
            unmarshal_text(b'"')

    def test_truncated_is_color_error(self):
        with pytest.raises(ColorError):
            unmarshal_text(b'a')

    def test_leading_quote_only(self):
        assert unmarshal_text(b'"abc') == parse_hex_color('abc')

    def test_trailing_quote_only(self):
        assert unmarshal_text(b'abc"') == parse_hex_color('abc')

    def test_strips_only_one_quote_each_side(self):
        with pytest.raises(ColorParseError):
            unmarshal_text(b'""abc""')

    def test_empty_quotes(self):
        with pytest.raises(ColorParseError):
            unmarshal_text(b'""')

    def test_parse_error_propagates(self):
        with pytest.raises(ColorParseError) as exc:
            unmarshal_text(b'"#ggg"')
        assert exc.value.text == 'gggggg'

    def test_undecodable_bytes(self):
        with pytest.raises(ColorParseError):
            unmarshal_text(b'\xff\xfe\xfd')
