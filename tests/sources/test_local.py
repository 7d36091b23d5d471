"""Tests for the local directory minutes source."""

from datetime import date

import pytest

from minutes_index.sources import get_source
from minutes_index.sources.local import LocalMinutesSource

MINUTES = """<div id=ResolutionSummary>
<h2>Summary of resolutions</h2>
<li><a href="#r01">Adopt the plan</a></li>
</div>"""


@pytest.fixture
def minutes_dir(tmp_path):
    directory = tmp_path / "minutes"
    directory.mkdir()
    (directory / "2024-03-12.html").write_text(MINUTES, encoding="utf-8")
    (directory / "2023-10-03-f2f.html").write_text("<p>No summary</p>", encoding="utf-8")
    (directory / "index.html").write_text("<p>generated</p>", encoding="utf-8")
    (directory / "notes.txt").write_text("not minutes", encoding="utf-8")
    return directory


class TestLocalMinutesSource:
    def test_lists_html_files(self, minutes_dir):
        source = LocalMinutesSource(minutes_dir, location="minutes/")
        records = source.list_minutes("")
        assert [r.file_name for r in records] == ["2024-03-12.html", "2023-10-03-f2f.html"]
        assert records[0].url == "minutes/2024-03-12.html"
        assert records[0].source == str(minutes_dir / "2024-03-12.html")
        assert records[1].date == date(2023, 10, 3)

    def test_without_location(self, minutes_dir):
        records = LocalMinutesSource(minutes_dir).list_minutes("")
        assert records[0].url == "2024-03-12.html"

    def test_scope_does_not_change_directory(self, minutes_dir):
        records = LocalMinutesSource(minutes_dir).list_minutes("pm-wg")
        assert [r.file_name for r in records] == ["2024-03-12.html", "2023-10-03-f2f.html"]

    def test_missing_directory(self, tmp_path):
        assert LocalMinutesSource(tmp_path / "absent").list_minutes("") == []

    def test_harvest(self, minutes_dir):
        harvested = LocalMinutesSource(minutes_dir, location="minutes").harvest("")
        (_, newest), (_, oldest) = harvested
        assert newest.resolutions == ('<li><a href="minutes/2024-03-12.html#r01">Adopt the plan</a></li>',)
        assert oldest.resolutions == ()


class TestRegistry:
    def test_get_source(self, tmp_path):
        source = get_source("local", directory=tmp_path)
        assert isinstance(source, LocalMinutesSource)

    def test_unknown_source(self):
        with pytest.raises(KeyError):
            get_source("svn")
