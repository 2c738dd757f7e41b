"""Tests for xtrsky.loader.reader module."""

import pytest

from xtrsky.errors import FormatError
from xtrsky.loader.reader import find_gnss_systems, parse_position, read_xtr_lines

from .xtr_factory import SITE_XYZ, data_line, epoch, position_line


class TestReadXtrLines:
    """Test reading and cleaning report lines."""

    def test_blank_lines_removed_order_kept(self, tmp_path):
        """Test that blank and whitespace-only lines are dropped."""
        path = tmp_path / "a.xtr"
        path.write_text("first\n\n   \nsecond\r\n\nthird")

        lines = read_xtr_lines(path)

        assert lines == ("first", "second", "third")

    def test_leading_spaces_preserved(self, tmp_path):
        """Test that fixed-column content keeps its leading blank."""
        path = tmp_path / "a.xtr"
        path.write_text(" GPSELE 2018-10-07 00:00:00\n")

        assert read_xtr_lines(path)[0].startswith(" GPSELE")

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing file raises FileNotFoundError (an IOError)."""
        with pytest.raises(FileNotFoundError, match="XTR file not found"):
            read_xtr_lines(tmp_path / "nope.xtr")

        with pytest.raises(IOError):
            read_xtr_lines(str(tmp_path / "nope.xtr"))


class TestFindGnssSystems:
    """Test satellite system detection from chapter headers."""

    def test_first_seen_order_distinct(self):
        lines = [
            "#====== Elevation & Azimuth",
            "#GALELE yyyy-mm-dd",
            data_line("GAL", "ELE", epoch(0), 1.0, [10.0]),
            "#GPSELE yyyy-mm-dd",
            data_line("GPS", "ELE", epoch(0), 1.0, [10.0]),
            "#GALAZI yyyy-mm-dd",
            data_line("GAL", "AZI", epoch(0), 1.0, [90.0]),
            "#GPSMC1 yyyy-mm-dd",
        ]

        assert find_gnss_systems(lines) == ["GAL", "GPS"]

    def test_summary_chapter_is_not_a_system(self):
        """Test that a chapter without ELE/AZI lines (e.g. #TOTSUM) is skipped."""
        lines = [
            "#TOTSUM First_Epoch________ Last_Epoch_________ Hours_ Sample",
            "=TOTSUM 2018-10-07 00:00:00 2018-10-07 23:59:30  24.00     30",
            "#GPSELE yyyy-mm-dd",
            data_line("GPS", "ELE", epoch(0), 1.0, [10.0]),
        ]

        assert find_gnss_systems(lines) == ["GPS"]

    def test_azimuth_lines_alone_qualify(self):
        lines = ["#GLOAZI yyyy-mm-dd", data_line("GLO", "AZI", epoch(0), 1.0, [90.0])]

        assert find_gnss_systems(lines) == ["GLO"]

    def test_header_without_measurements_skipped(self):
        lines = ["#GPSELE yyyy-mm-dd", "#GPSMC1 yyyy-mm-dd", data_line("GPS", "MC1", epoch(0), 1.0, [5.0])]

        assert find_gnss_systems(lines) == []

    def test_template_and_separators_ignored(self):
        lines = ["#====== Summary", "#GNSSUM header", "#----- notes", "#gpsELE lower"]

        assert find_gnss_systems(lines) == []

    def test_data_lines_are_not_chapters(self):
        lines = [" GPSELE 2018-10-07 00:00:00", "=XYZGPS 2018-10-07"]

        assert find_gnss_systems(lines) == []

    def test_empty_input(self):
        assert find_gnss_systems([]) == []


class TestParsePosition:
    """Test position line parsing."""

    def test_parse_position(self):
        lines = ["#GPSELE", position_line("GPS", SITE_XYZ), position_line("GAL", (1.0, 2.0, 3.0))]

        assert parse_position(lines, "GPS") == pytest.approx(SITE_XYZ)
        assert parse_position(lines, "GAL") == pytest.approx((1.0, 2.0, 3.0))

    def test_missing_position_is_none(self):
        assert parse_position(["#GPSELE"], "GPS") is None

    def test_non_numeric_position_raises(self):
        line = "=XYZGPS 2018-10-07 00:00:00    4033461.0000   abc   4818493.0000"

        with pytest.raises(FormatError, match="Non-numeric"):
            parse_position([line], "GPS")

    def test_wrong_coordinate_count_raises(self):
        line = "=XYZGPS 2018-10-07 00:00:00    4033461.0000   1018531.0000"

        with pytest.raises(FormatError, match="Expected 3 coordinates"):
            parse_position([line], "GPS")
