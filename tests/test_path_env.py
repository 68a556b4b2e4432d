"""
Tests for PATH splitting, normalization and idempotent appends.
"""

import pytest

from aiosinstall.install.path_env import (
    append_path_entries,
    contains_path_entry,
    normalize_path_entry,
    split_path_variable,
)


class TestSplit:

    def test_drops_empty_segments(self):
        assert split_path_variable(r"C:\Windows;;C:\Tools; ;") == [r"C:\Windows", r"C:\Tools"]

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_value(self, value):
        assert split_path_variable(value) == []


class TestNormalize:

    @pytest.mark.parametrize(
        "variant",
        [
            r"C:\Program Files\AIOS",
            r"C:\Program Files\AIOS" + "\\",
            r"c:\program files\aios",
            "C:/Program Files/AIOS/",
            r'"C:\Program Files\AIOS"',
            r"C:\Program Files\.\AIOS",
        ],
    )
    def test_equivalent_spellings_normalize_equal(self, variant):
        assert normalize_path_entry(variant) == normalize_path_entry(r"C:\Program Files\AIOS")

    def test_drive_root_keeps_separator(self):
        assert normalize_path_entry("C:\\") == "c:\\"

    def test_different_directories_differ(self):
        assert normalize_path_entry(r"C:\Program Files\AIOS") != normalize_path_entry(r"C:\Program Files\AIOS2")


class TestContains:

    def test_equivalent_entry_is_found(self):
        assert contains_path_entry("C:\\Windows;c:\\program files\\aios\\", r"C:\Program Files\AIOS")

    def test_prefix_is_not_a_match(self):
        assert not contains_path_entry(r"C:\Program Files\AIOS2", r"C:\Program Files\AIOS")

    @pytest.mark.parametrize("value", ["", None, ";;"])
    def test_empty_value(self, value):
        assert not contains_path_entry(value, r"C:\Program Files\AIOS")


class TestAppend:

    def test_appends_missing_entry(self):
        value, added = append_path_entries(r"C:\Windows", [r"C:\Program Files\AIOS"])

        assert value == r"C:\Windows;C:\Program Files\AIOS"
        assert added == [r"C:\Program Files\AIOS"]

    def test_empty_value(self):
        value, added = append_path_entries("", [r"C:\Program Files\AIOS"])

        assert value == r"C:\Program Files\AIOS"
        assert added == [r"C:\Program Files\AIOS"]

    def test_existing_equivalent_entry_leaves_value_untouched(self):
        original = r"C:\Windows;c:\program files\aios\;"

        value, added = append_path_entries(original, [r"C:\Program Files\AIOS"])

        assert value == original
        assert added == []

    def test_applying_twice_equals_applying_once(self):
        once, _ = append_path_entries(r"C:\Windows", [r"C:\Program Files\AIOS"])
        twice, added = append_path_entries(once, [r"C:\Program Files\AIOS"])

        assert twice == once
        assert added == []

    def test_duplicates_within_entries_added_once(self):
        value, added = append_path_entries("", [r"C:\CUDA\bin", r"c:\cuda\bin\\", r"C:\CUDA\libnvvp"])

        assert added == [r"C:\CUDA\bin", r"C:\CUDA\libnvvp"]
        assert value == r"C:\CUDA\bin;C:\CUDA\libnvvp"

    def test_existing_text_is_kept_verbatim(self):
        value, added = append_path_entries(r"C:\A;;C:\B ; ", [r"C:\AIOS"])

        assert value == r"C:\A;;C:\B ; ;C:\AIOS"
        assert added == [r"C:\AIOS"]

    def test_trailing_separator_is_not_doubled(self):
        value, _ = append_path_entries("C:\\Windows;", [r"C:\AIOS"])

        assert value == r"C:\Windows;C:\AIOS"
