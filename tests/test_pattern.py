"""Tests for bead_map.pattern: pattern model and the checks that gate persistence."""

import pytest

from bead_map.errors import (
    InvalidPatternError,
    LengthMismatchError,
    UnknownColorCodeError,
    UnknownColourCodeError,
)
from bead_map.pattern import (
    Pattern,
    check_pattern,
    update_pattern,
    validate_dimensions,
    validate_palette,
)


@pytest.fixture
def pattern():
    return Pattern(2, 2, (None, 'A1', 'B1'), '2*0,1*1,1*2')


class TestPatternModel:
    def test_palette_is_tuple(self):
        p = Pattern(1, 1, [None, 'A1'], '1*1')
        assert p.palette == (None, 'A1')

    def test_pixels_and_grid(self, pattern):
        assert pattern.size == 4
        assert pattern.pixels() == [0, 0, 1, 2]
        assert pattern.grid().tolist() == [[0, 0], [1, 2]]

    def test_from_pixels(self):
        p = Pattern.from_pixels(2, 2, [None, 'A1'], [[0, 1], [1, 1]])
        assert p.data == '1*0,3*1'
        assert p.palette == (None, 'A1')

    def test_from_pixels_wrong_length(self):
        with pytest.raises(LengthMismatchError):
            Pattern.from_pixels(2, 2, [None, 'A1'], [0, 1, 1])

    def test_dict_round_trip(self, pattern):
        payload = pattern.to_dict()
        assert payload == {'width': 2, 'height': 2, 'palette': [None, 'A1', 'B1'], 'data': '2*0,1*1,1*2'}
        assert Pattern.from_dict(payload) == pattern

    @pytest.mark.parametrize(
        'field, value', [('palette', None), ('palette', 'A1'), ('data', 42), ('data', ['1*0'])]
    )
    def test_from_dict_mistyped_field(self, pattern, field, value):
        payload = pattern.to_dict()
        payload[field] = value
        with pytest.raises(InvalidPatternError, match=field):
            Pattern.from_dict(payload)

    def test_from_dict_null_data(self, pattern):
        payload = pattern.to_dict()
        payload['data'] = None
        assert Pattern.from_dict(payload).data is None

    def test_from_dict_missing_field(self):
        with pytest.raises(InvalidPatternError, match='data'):
            Pattern.from_dict({'width': 1, 'height': 1, 'palette': [None]})


class TestCheckPattern:
    def test_valid(self, pattern, rgb_matcher):
        assert check_pattern(pattern, rgb_matcher) is pattern

    def test_unknown_code(self, rgb_matcher):
        p = Pattern(1, 1, (None, 'A1', 'Z9'), '1*2')
        with pytest.raises(UnknownColourCodeError) as info:
            check_pattern(p, rgb_matcher)
        assert info.value.code == 'Z9'
        assert info.value.slot == 2
        assert 'Z9' in str(info.value)

    def test_american_alias(self):
        assert UnknownColorCodeError is UnknownColourCodeError

    def test_empty_slot_beyond_zero_rejected(self, rgb_matcher):
        with pytest.raises(UnknownColourCodeError):
            validate_palette((None, None), rgb_matcher)

    @pytest.mark.parametrize('slot0', [None, '', 'A1'])
    def test_slot_zero(self, slot0, rgb_matcher):
        validate_palette((slot0, 'B1'), rgb_matcher)

    def test_unknown_slot_zero(self, rgb_matcher):
        with pytest.raises(UnknownColourCodeError):
            validate_palette(('Z9', 'B1'), rgb_matcher)

    def test_empty_palette(self, rgb_matcher):
        with pytest.raises(InvalidPatternError):
            validate_palette((), rgb_matcher)

    def test_index_out_of_palette(self, rgb_matcher):
        p = Pattern(2, 2, (None, 'A1', 'B1'), '4*3')
        with pytest.raises(InvalidPatternError, match='out of range'):
            check_pattern(p, rgb_matcher)

    def test_length_mismatch(self, rgb_matcher):
        p = Pattern(2, 2, (None, 'A1'), '3*1')
        with pytest.raises(InvalidPatternError, match='length mismatch'):
            check_pattern(p, rgb_matcher)

    def test_malformed_data(self, rgb_matcher):
        p = Pattern(2, 2, (None, 'A1'), '4x1')
        with pytest.raises(InvalidPatternError, match='Invalid RLE data'):
            check_pattern(p, rgb_matcher)

    @pytest.mark.parametrize('width, height', [(0, 1), (1, 129), (True, 2), (2.0, 2), ('2', 2)])
    def test_bad_dimensions(self, width, height):
        with pytest.raises(InvalidPatternError):
            validate_dimensions(width, height)

    def test_max_dimensions(self, rgb_matcher):
        p = Pattern(128, 128, (None,), '16384*0')
        check_pattern(p, rgb_matcher)

    def test_uses_default_table(self):
        check_pattern(Pattern(1, 1, (None, 'F2'), '1*1'))


class TestUpdatePattern:
    def test_no_changes_skips_checks(self, rgb_matcher):
        broken = Pattern(0, 0, (), '')
        assert update_pattern(broken, rgb_matcher) == broken

    def test_none_values_ignored(self, pattern, rgb_matcher):
        assert update_pattern(pattern, rgb_matcher, data=None, palette=None) == pattern

    def test_data_update(self, pattern, rgb_matcher):
        updated = update_pattern(pattern, rgb_matcher, data='4*2')
        assert updated.data == '4*2'
        assert updated.palette == pattern.palette

    def test_resize_needs_matching_data(self, pattern, rgb_matcher):
        with pytest.raises(InvalidPatternError, match='length mismatch'):
            update_pattern(pattern, rgb_matcher, width=4)
        updated = update_pattern(pattern, rgb_matcher, width=4, data='8*1')
        assert updated.size == 8

    def test_bad_dimension_update(self, pattern, rgb_matcher):
        with pytest.raises(InvalidPatternError):
            update_pattern(pattern, rgb_matcher, height=200, data='400*0')

    def test_palette_update(self, pattern, rgb_matcher):
        updated = update_pattern(pattern, rgb_matcher, palette=[None, 'A1', 'B1', 'C1'], data='4*3')
        assert updated.palette == (None, 'A1', 'B1', 'C1')

    def test_palette_update_unknown_code(self, pattern, rgb_matcher):
        with pytest.raises(UnknownColourCodeError):
            update_pattern(pattern, rgb_matcher, palette=[None, 'A1', 'Q7'])

    def test_shrinking_palette_rechecks_data(self, pattern, rgb_matcher):
        with pytest.raises(InvalidPatternError, match='out of range'):
            update_pattern(pattern, rgb_matcher, palette=[None, 'A1'])

    def test_original_unchanged(self, pattern, rgb_matcher):
        update_pattern(pattern, rgb_matcher, data='4*1')
        assert pattern.data == '2*0,1*1,1*2'
