"""Text and date helper unit tests."""

from datetime import datetime, timedelta, timezone

from app.shared.utils.datetime import ensure_utc, format_short_date
from app.shared.utils.sanitization import clean_html, escape_like, truncate


def test_clean_html_strips_tags_and_decodes_entities() -> None:
    assert clean_html("<p>Hello&nbsp;<em>world</em></p><p>again</p>") == "Hello world again"


def test_clean_html_drops_script_bodies() -> None:
    assert clean_html("<p>ok</p><script>alert(1)</script>") == "ok"


def test_clean_html_empty_values() -> None:
    assert clean_html(None) == ""
    assert clean_html("") == ""


def test_escape_like() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_truncate_only_marks_cut_text() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("abcdef", 3) == "abc..."


def test_format_short_date_has_no_leading_zero() -> None:
    assert format_short_date(datetime(2025, 3, 5)) == "5 Mar 2025"
    assert format_short_date(datetime(2024, 12, 31)) == "31 Dec 2024"


def test_ensure_utc() -> None:
    assert ensure_utc(None) is None
    naive = datetime(2025, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    plus_two = datetime(2025, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two).hour == 12
