"""Fixtures for CLI tests"""

import pytest
from click.testing import CliRunner
from padseq_core.codec import encode_pattern
from padseq_core.editing import create_empty_pattern, toggle_step


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def groove():
    """1-bar 16n pattern: kick on 1 and 9, snare on 5 and 13"""
    pattern = create_empty_pattern(name="Groove", bpm=100)
    for step in (0, 8):
        pattern = toggle_step(pattern, 16, step)
    for step in (4, 12):
        pattern = toggle_step(pattern, 6, step)
    return pattern


@pytest.fixture
def groove_link(groove):
    return f"http://localhost:8000/?pattern={encode_pattern(groove)}"
