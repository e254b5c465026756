"""Shared fixtures: small reference tables and a clean default matcher per test."""

import pytest

from bead_map.constants import TABLE_ENV_VAR
from bead_map.core_types import ReferenceColour
from bead_map.matcher import ColourMatcher, set_default_matcher

RGB_TABLE = 'A1\tff0000\nB1\t00ff00\nC1\t0000ff\n'


@pytest.fixture(autouse=True)
def _clean_default_matcher(monkeypatch):
    monkeypatch.delenv(TABLE_ENV_VAR, raising=False)
    set_default_matcher(None)
    yield
    set_default_matcher(None)


@pytest.fixture
def red_green():
    return ColourMatcher.from_table(
        [
            ReferenceColour(code='A1', hex='ff0000', group='A'),
            ReferenceColour(code='B1', hex='00ff00', group='B'),
        ]
    )


@pytest.fixture
def rgb_matcher():
    return ColourMatcher.from_text(RGB_TABLE)


@pytest.fixture
def rgb_table_file(tmp_path):
    path = tmp_path / 'colours.txt'
    path.write_text(RGB_TABLE, encoding='utf-8')
    return path
