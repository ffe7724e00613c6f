"""
Bookmark Checker v1 - Exporter Tests

Tests for the invalid bookmark CSV report.
"""

from datetime import date

import pytest

from bookmarks.exporter import export_filename, export_invalid_bookmarks, quote_field
from bookmarks.models import Bookmark, BookmarkStatus


def invalid(name: str, **kwargs) -> Bookmark:
    return Bookmark(
        id=f"bm-{name}",
        name=name,
        url=kwargs.pop("url", "https://broken.example.com/"),
        status=BookmarkStatus.INVALID,
        **kwargs,
    )


@pytest.mark.unit
class TestExportInvalidBookmarks:
    """Tests for CSV rendering."""

    def test_no_invalid_bookmarks_returns_empty(self):
        """Test that nothing is exported when every bookmark is fine."""
        bookmarks = [
            Bookmark(id="1", name="A", url="https://a.com", status=BookmarkStatus.VALID),
            Bookmark(id="2", name="B", url="https://b.com"),
        ]
        assert export_invalid_bookmarks(bookmarks) == ""
        assert export_invalid_bookmarks([]) == ""

    def test_header_and_row(self):
        """Test the header and a fully populated row."""
        csv_text = export_invalid_bookmarks([
            invalid("Docs", category="Tools", error_message="HTTP 404 Not Found", status_code=404),
        ])

        assert csv_text.split("\n") == [
            "Name,URL,Category,ErrorMessage,StatusCode",
            '"Docs","https://broken.example.com/","Tools","HTTP 404 Not Found",404',
        ]

    def test_embedded_quotes_are_doubled(self):
        """Test that a name containing quotes is escaped."""
        csv_text = export_invalid_bookmarks([invalid('He said "hi"')])
        row = csv_text.split("\n")[1]
        assert row.startswith('"He said ""hi""",')

    def test_missing_status_code_is_empty(self):
        """Test that a network failure leaves the status code column empty."""
        csv_text = export_invalid_bookmarks([invalid("Down", error_message="Connection refused")])
        row = csv_text.split("\n")[1]
        assert row == '"Down","https://broken.example.com/","","Connection refused",'

    def test_only_invalid_rows_in_order(self):
        """Test that valid and pending bookmarks are left out."""
        bookmarks = [
            invalid("First"),
            Bookmark(id="ok", name="Fine", url="https://fine.com", status=BookmarkStatus.VALID),
            invalid("Second"),
        ]
        rows = export_invalid_bookmarks(bookmarks).split("\n")

        assert len(rows) == 3
        assert rows[1].startswith('"First"')
        assert rows[2].startswith('"Second"')

    def test_commas_stay_inside_quotes(self):
        """Test that commas in values do not split columns."""
        row = export_invalid_bookmarks([invalid("a, b", error_message="x, y")]).split("\n")[1]
        assert row.startswith('"a, b",')
        assert '"x, y"' in row


@pytest.mark.unit
class TestHelpers:
    """Tests for export helpers."""

    def test_quote_field(self):
        assert quote_field('say "x"') == '"say ""x"""'
        assert quote_field(None) == '""'

    def test_export_filename(self):
        assert export_filename(date(2024, 1, 31)) == "invalid-bookmarks-2024-01-31.csv"

    def test_export_filename_defaults_to_today(self):
        assert export_filename() == f"invalid-bookmarks-{date.today().isoformat()}.csv"
