import itertools

import pytest

from storyboard_manager.core.scene_codes import (
    code_matches, compare_codes, normalize_code, parse_code, sort_scenes
)

SAMPLE_CODES = ["1", "2", "2.9", "2.10", "003.1", "003.2", "003.10", "10", "10-1", "1.0", "abc", "", "7..2"]


class TestNormalizeCode:
    @pytest.mark.parametrize("raw, expected", [
        ("3.1", "003.1"),
        ("12", "012"),
        (" 5 ", "005"),
        ("3-1", "003-1"),
        ("1234", "234"),
        ("007", "007"),
        ("", ""),
        ("   ", ""),
    ])
    def test_examples(self, raw, expected):
        assert normalize_code(raw) == expected

    def test_dash_anywhere_wins_as_joiner(self):
        assert normalize_code("3.1-2") == "003-1-2"

    @pytest.mark.parametrize("raw", ["3.1", "3-1", "1234.5", "0", "3.1-2", "42"])
    def test_idempotent(self, raw):
        once = normalize_code(raw)
        assert normalize_code(once) == once

    def test_none_is_empty(self):
        assert normalize_code(None) == ""


class TestCodeMatches:
    @pytest.mark.parametrize("value", ["1", "003.2", "12-1", " 4 ", "1.2.3"])
    def test_valid(self, value):
        assert code_matches(value)

    @pytest.mark.parametrize("value", ["abc", "", "1.", ".1", "1..2", "--- ", "Code", "1a"])
    def test_invalid(self, value):
        assert not code_matches(value)


class TestCompareCodes:
    def test_numeric_segments(self):
        assert compare_codes("2.10", "2.9") == 1
        assert compare_codes("2.9", "2.10") == -1

    def test_padding_is_ignored(self):
        assert compare_codes("003.1", "3.1") == 0

    def test_missing_segments_count_as_zero(self):
        assert compare_codes("1", "1.0") == 0
        assert compare_codes("1", "1.1") == -1

    def test_malformed_never_raises(self):
        assert compare_codes("abc", "0") == 0
        assert compare_codes("", "1") == -1
        assert compare_codes("x.y", "7..2") in (-1, 0, 1)

    def test_parse_code_unparseable_segment(self):
        assert parse_code("3.x.2") == [3, 0, 2]

    def test_antisymmetry(self):
        for a, b in itertools.product(SAMPLE_CODES, repeat=2):
            assert compare_codes(a, b) == -compare_codes(b, a)

    def test_transitivity(self):
        for a, b, c in itertools.product(SAMPLE_CODES, repeat=3):
            if compare_codes(a, b) <= 0 and compare_codes(b, c) <= 0:
                assert compare_codes(a, c) <= 0


class TestSortScenes:
    def test_hierarchical_order(self, make_scene):
        scenes = [make_scene("003.2"), make_scene("003.10"), make_scene("003.1")]
        assert [s.code for s in sort_scenes(scenes)] == ["003.1", "003.2", "003.10"]

    def test_returns_new_list(self, make_scene):
        scenes = [make_scene("002"), make_scene("001")]
        result = sort_scenes(scenes)
        assert result is not scenes
        assert [s.code for s in scenes] == ["002", "001"]

    def test_stable_for_equal_codes(self, make_scene):
        first = make_scene("001", en_text="first")
        second = make_scene("1", en_text="second")
        result = sort_scenes([make_scene("002"), first, second])
        assert [s.en_text for s in result[:2]] == ["first", "second"]
