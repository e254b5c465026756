"""Tests for bead_map.colour_convert: hex parsing, sRGB to Lab and CIEDE2000."""

import numpy as np
import pytest

from bead_map.colour_convert import (
    ciede2000,
    delta_e2000_pair,
    delta_e2000_vec,
    hex_to_rgb,
    normalise_hex,
    rgb_from_hex,
    rgb_to_hex,
    rgb_to_lab,
)
from bead_map.errors import FormatError


class TestHexParsing:
    def test_six_digits(self):
        assert rgb_from_hex('ff0000') == (255, 0, 0)
        assert rgb_from_hex('#FF0000') == (255, 0, 0)
        assert rgb_from_hex('#1a2B3c') == (26, 43, 60)

    def test_shorthand_expands_per_digit(self):
        assert rgb_from_hex('abc') == rgb_from_hex('aabbcc') == (170, 187, 204)
        assert rgb_from_hex('#f00') == (255, 0, 0)

    @pytest.mark.parametrize(
        'bad',
        ['', '#', 'ab', 'abcd', 'abcde', 'gggggg', '#ff00001', ' ff0000', '##fff', None, 0xFF0000],
    )
    def test_rejects_other_forms(self, bad):
        with pytest.raises(FormatError):
            rgb_from_hex(bad)

    def test_normalise(self):
        assert normalise_hex('#ABC') == '#aabbcc'
        assert normalise_hex('00FF7f') == '#00ff7f'

    def test_rgb_to_hex(self):
        assert rgb_to_hex((255, 0, 16)) == '#ff0010'
        assert rgb_to_hex((1, 2, 3), prefix='') == '010203'

    def test_alias(self):
        assert hex_to_rgb is rgb_from_hex


class TestRgbToLab:
    def test_white(self):
        L, a, b = rgb_to_lab((255, 255, 255))
        assert L == pytest.approx(100.0, abs=0.05)
        assert a == pytest.approx(0.0, abs=0.05)
        assert b == pytest.approx(0.0, abs=0.05)

    def test_black(self):
        assert rgb_to_lab((0, 0, 0)).tolist() == pytest.approx([0.0, 0.0, 0.0], abs=1e-9)

    def test_red(self):
        assert rgb_to_lab((255, 0, 0)).tolist() == pytest.approx([53.24, 80.09, 67.20], abs=0.02)

    def test_dark_values_use_linear_branch(self):
        L = rgb_to_lab((1, 1, 1))[0]
        assert L == pytest.approx(0.2742, abs=1e-3)

    def test_batch_matches_single(self):
        rgb = np.array([[[255, 0, 0], [0, 128, 255]], [[12, 34, 56], [200, 200, 10]]])
        lab = rgb_to_lab(rgb)
        assert lab.shape == (2, 2, 3)
        assert lab.dtype == np.float64
        for y in range(2):
            for x in range(2):
                assert lab[y, x].tolist() == pytest.approx(rgb_to_lab(rgb[y, x]).tolist())

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            rgb_to_lab([1, 2])


# Reference pairs from Sharma, Wu & Dalal (2005), "The CIEDE2000 color-difference formula".
SHARMA_PAIRS = [
    ((50.0000, 2.6772, -79.7751), (50.0000, 0.0000, -82.7485), 2.0425),
    ((50.0000, 3.1571, -77.2803), (50.0000, 0.0000, -82.7485), 2.8615),
    ((50.0000, 2.8361, -74.0200), (50.0000, 0.0000, -82.7485), 3.4412),
    ((50.0000, -1.3802, -84.2814), (50.0000, 0.0000, -82.7485), 1.0000),
    ((50.0000, 0.0000, 0.0000), (50.0000, -1.0000, 2.0000), 2.3669),
    ((50.0000, -1.0000, 2.0000), (50.0000, 0.0000, 0.0000), 2.3669),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0009), 7.1792),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0010), 7.1792),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0011), 7.2195),
    ((50.0000, 2.4900, -0.0010), (50.0000, -2.4900, 0.0012), 7.2195),
    ((50.0000, -0.0010, 2.4900), (50.0000, 0.0009, -2.4900), 4.8045),
    ((50.0000, 2.5000, 0.0000), (50.0000, 0.0000, -2.5000), 4.3065),
    ((50.0000, 2.5000, 0.0000), (73.0000, 25.0000, -18.0000), 27.1492),
    ((50.0000, 2.5000, 0.0000), (61.0000, -5.0000, 29.0000), 22.8977),
    ((50.0000, 2.5000, 0.0000), (56.0000, -27.0000, -3.0000), 31.9030),
    ((50.0000, 2.5000, 0.0000), (58.0000, 24.0000, 15.0000), 19.4535),
    ((60.2574, -34.0099, 36.2677), (60.4626, -34.1751, 39.4387), 1.2644),
    ((63.0109, -31.0961, -5.8663), (62.8187, -29.7946, -4.0864), 1.2630),
    ((22.7233, 20.0904, -46.6940), (23.0331, 14.9730, -42.5619), 2.0373),
]


class TestCiede2000:
    @pytest.mark.parametrize('lab1, lab2, expected', SHARMA_PAIRS)
    def test_reference_pairs(self, lab1, lab2, expected):
        assert delta_e2000_pair(lab1, lab2) == pytest.approx(expected, abs=1e-4)

    @pytest.mark.parametrize('lab1, lab2, _expected', SHARMA_PAIRS)
    def test_symmetric(self, lab1, lab2, _expected):
        assert delta_e2000_pair(lab1, lab2) == pytest.approx(delta_e2000_pair(lab2, lab1), rel=1e-12)

    def test_identical_is_zero(self):
        assert delta_e2000_pair((41.2, -12.0, 30.5), (41.2, -12.0, 30.5)) == 0.0
        assert delta_e2000_pair((50.0, 0.0, 0.0), (50.0, 0.0, 0.0)) == 0.0

    def test_non_negative(self):
        rng = np.random.default_rng(3)
        labs = rgb_to_lab(rng.integers(0, 256, size=(40, 3)))
        for i in range(0, 40, 2):
            assert delta_e2000_pair(labs[i], labs[i + 1]) >= 0.0

    def test_vec_matches_pair(self):
        src = rgb_to_lab((120, 30, 200))
        cands = rgb_to_lab(np.array([[0, 0, 0], [255, 255, 255], [120, 30, 201], [10, 200, 30]]))
        out = delta_e2000_vec(src, cands)
        assert out.shape == (4,)
        for i in range(4):
            assert out[i] == delta_e2000_pair(src, cands[i])

    def test_alias(self):
        assert ciede2000 is delta_e2000_pair
