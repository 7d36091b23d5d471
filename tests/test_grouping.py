"""Tests for year and task force grouping."""

from datetime import date

from minutes_index.grouping import group_by_task_force, group_by_year, partition_by_task_force
from minutes_index.models import ExtractedMinutes, MinutesRecord


def minutes(day: date, url: str = "") -> ExtractedMinutes:
    return ExtractedMinutes(url=url or f"https://example.org/{day.isoformat()}.html", date=day)


def pair(name: str, day: date, task_force: str = ""):
    record = MinutesRecord(file_name=name, url=f"https://example.org/{name}", date=day, task_force=task_force)
    return record, ExtractedMinutes(url=record.url, date=day)


class TestGroupByYear:
    def test_groups_in_arrival_order(self):
        rec1 = minutes(date(2021, 1, 1))
        rec2 = minutes(date(2021, 6, 1))
        rec3 = minutes(date(2022, 1, 1))
        assert group_by_year([rec1, rec2, rec3]) == {2021: [rec1, rec2], 2022: [rec3]}

    def test_year_keys_in_first_encounter_order(self):
        items = [minutes(date(2024, 5, 1)), minutes(date(2023, 5, 1)), minutes(date(2024, 1, 1))]
        groups = group_by_year(items)
        assert list(groups) == [2024, 2023]
        assert groups[2024] == [items[0], items[2]]

    def test_empty(self):
        assert group_by_year([]) == {}

    def test_duplicates_kept(self):
        item = minutes(date(2024, 1, 1))
        assert group_by_year([item, item]) == {2024: [item, item]}


class TestPartitionByTaskForce:
    def test_preserves_order_within_partition(self):
        items = [("a", 1), ("b", 2), ("a", 3)]
        parts = partition_by_task_force(items, lambda item: item[0])
        assert parts == {"a": [("a", 1), ("a", 3)], "b": [("b", 2)]}


class TestGroupByTaskForce:
    def test_default_and_f2f_always_present(self):
        groups = group_by_task_force([])
        assert groups == {"": {}, "f2f": {}}

    def test_partitions_by_suffix(self):
        harvested = [
            pair("2024-03-12.html", date(2024, 3, 12)),
            pair("2024-02-01-f2f.html", date(2024, 2, 1), "f2f"),
            pair("2023-11-20.html", date(2023, 11, 20)),
        ]
        groups = group_by_task_force(harvested, known_task_forces=["", "f2f"])
        assert list(groups[""]) == [2024, 2023]
        assert len(groups["f2f"][2024]) == 1
        assert groups["f2f"][2024][0].date == date(2024, 2, 1)

    def test_unknown_task_force_kept_separately(self):
        harvested = [pair("2024-03-12-misc.html", date(2024, 3, 12), "misc")]
        groups = group_by_task_force(harvested, known_task_forces=["", "f2f"])
        assert list(groups["misc"]) == [2024]
        assert groups[""] == {}
