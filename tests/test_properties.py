"""Property-based tests for the duration codec, paths and template engine.

Uses hypothesis to verify algorithmic properties hold for many inputs.
"""

from datetime import date, timedelta
from pathlib import Path

from hypothesis import given, strategies as st

from daybook.duration import format_duration, parse_duration, validate_duration
from daybook.paths import journal_path, week_start
from daybook.templates import expand

ROOT = Path("/notes")

tokens = st.builds(
    lambda n, unit: f"{n}{unit}",
    st.integers(min_value=0, max_value=10**6),
    st.sampled_from("hms"),
)
dates = st.dates(min_value=date(1970, 1, 1), max_value=date(2100, 12, 31))


def total_from_formatted(text: str) -> int:
    return sum(parse_duration(part) for part in text.split())


class TestDurationProperties:
    """Property-based tests for duration tokens."""

    @given(token=tokens)
    def test_valid_tokens_validate(self, token):
        assert validate_duration(token) is True

    @given(token=tokens)
    def test_format_preserves_total(self, token):
        """Formatting a parsed token describes the same number of seconds."""
        assert total_from_formatted(format_duration(parse_duration(token))) == parse_duration(token)

    @given(seconds=st.integers(min_value=0, max_value=10**8))
    def test_format_components_in_order(self, seconds):
        units = [part[-1] for part in format_duration(seconds).split()]
        assert units == sorted(units, key="hms".index)
        assert len(units) == len(set(units))

    @given(text=st.text(max_size=12))
    def test_parse_never_raises(self, text):
        assert parse_duration(text) >= 0


class TestPathProperties:
    """Property-based tests for journal paths."""

    @given(d=dates)
    def test_daily_path_stable(self, d):
        assert journal_path("daily", d, ROOT) == journal_path("daily", d, ROOT)
        assert journal_path("daily", d, ROOT) == ROOT / "journals" / str(d.year) / str(d.month) / f"{d.day}.md"

    @given(d=dates)
    def test_week_start_is_monday_within_six_days(self, d):
        monday = week_start(d)
        assert monday.weekday() == 0
        assert timedelta(0) <= d - monday <= timedelta(days=6)

    @given(d=dates)
    def test_whole_week_shares_a_leaf(self, d):
        monday = week_start(d)
        leaf = journal_path("weekly", monday, ROOT).name
        for i in range(7):
            assert journal_path("weekly", monday + timedelta(days=i), ROOT).name == leaf

    @given(d=dates)
    def test_iso_string_matches_date(self, d):
        assert journal_path("daily", d.isoformat(), ROOT) == journal_path("daily", d, ROOT)


class TestTemplateProperties:
    """Property-based tests for template expansion."""

    @given(text=st.text(alphabet=st.characters(blacklist_characters="{}"), max_size=50))
    def test_plain_text_unchanged(self, text):
        assert expand(text, lambda name: None, today=date(2024, 1, 15)) == text

    @given(
        indent=st.text(alphabet=" \t", max_size=6),
        lines=st.lists(st.text(alphabet="abc -[]", max_size=10), min_size=1, max_size=5),
    )
    def test_include_prefixes_every_line(self, indent, lines):
        child = "\n".join(lines)
        result = expand(indent + "{{> child}}", {"child": child}.get, today=date(2024, 1, 15))
        assert result.split("\n") == [indent + line for line in lines]
