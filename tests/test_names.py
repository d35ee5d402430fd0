"""
Tests for station field parsing.
"""

from stationpref.models import StationQuery
from stationpref.names import first_field, parse_station_field


class TestParseStationField:
    """Test splitting a raw field into name and hint."""

    def test_name_with_line_hint(self):
        """Parenthesized line should become the hint."""
        assert parse_station_field("Shibuya (Ginza Line)") == StationQuery("Shibuya", "Ginza Line")

    def test_name_without_hint(self):
        """Plain name should have an empty hint."""
        assert parse_station_field("Shibuya") == StationQuery("Shibuya", "")

    def test_surrounding_whitespace_trimmed(self):
        """Name and hint should both be trimmed."""
        assert parse_station_field("  新宿 ( JR山手線 )  ") == StationQuery("新宿", "JR山手線")

    def test_ideographic_space_trimmed(self):
        """Full-width spaces common in Japanese input should be trimmed too."""
        assert parse_station_field("渋谷　(東京都)") == StationQuery("渋谷", "東京都")

    def test_no_space_before_paren(self):
        """Hint should be found without a separating space."""
        assert parse_station_field("大手町(広島県)") == StationQuery("大手町", "広島県")

    def test_missing_closing_paren(self):
        """Unterminated hint should still be used."""
        assert parse_station_field("Shinjuku (Yamanote Line") == StationQuery("Shinjuku", "Yamanote Line")

    def test_every_closing_paren_stripped(self):
        """All ')' characters in the hint should be removed."""
        assert parse_station_field("A (B))") == StationQuery("A", "B")

    def test_multiple_open_parens_not_split(self):
        """More than one '(' should fall back to the whole trimmed string with no hint."""
        assert parse_station_field("A(B)(C)") == StationQuery("A(B)(C)", "")
        assert parse_station_field(" A (B) (C) ") == StationQuery("A (B) (C)", "")

    def test_empty_field(self):
        """Empty input should not crash."""
        assert parse_station_field("") == StationQuery("", "")
        assert parse_station_field("()") == StationQuery("", "")


class TestFirstField:
    """Test extracting the station column from a record."""

    def test_first_of_many(self):
        assert first_field(["渋谷", "extra"]) == "渋谷"

    def test_empty_record(self):
        """Blank CSV rows should yield an empty field."""
        assert first_field([]) == ""
        assert first_field(()) == ""
