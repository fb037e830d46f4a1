"""Tests for omm.entries: catalog sort policy and entry list operations."""
from __future__ import annotations

from datetime import datetime

from omm.entries import Catalog, new_catalog_id, parse_franchise_order, sort_entries
from omm.entry import Entry


def _titles(entries: list[Entry]) -> list[str]:
    return [e.title for e in entries]


class TestParseFranchiseOrder:
    def test_plain(self) -> None:
        assert parse_franchise_order("3") == 3

    def test_leading_integer(self) -> None:
        assert parse_franchise_order(" 4th ") == 4
        assert parse_franchise_order("-1") == -1

    def test_missing(self) -> None:
        assert parse_franchise_order("") is None
        assert parse_franchise_order("prequel") is None


class TestSortEntries:
    def test_franchise_order_then_standalone(self) -> None:
        entries = [
            Entry(title="Standalone"),
            Entry(title="Second", franchise="X", franchise_order="2"),
            Entry(title="First", franchise="X", franchise_order="1"),
        ]
        sort_entries(entries)
        assert _titles(entries) == ["First", "Second", "Standalone"]

    def test_franchises_in_natural_order(self) -> None:
        entries = [
            Entry(title="b", franchise="Saga 10", franchise_order="1"),
            Entry(title="a", franchise="Saga 2", franchise_order="1"),
            Entry(title="c", franchise="Anthology", franchise_order="5"),
        ]
        sort_entries(entries)
        assert [e.franchise for e in entries] == ["Anthology", "Saga 2", "Saga 10"]

    def test_order_compared_as_integer(self) -> None:
        entries = [
            Entry(title="Ten", franchise="F", franchise_order="10"),
            Entry(title="Nine", franchise="F", franchise_order="9"),
        ]
        sort_entries(entries)
        assert _titles(entries) == ["Nine", "Ten"]

    def test_equal_order_falls_back_to_title_and_type(self) -> None:
        entries = [
            Entry(title="Movie", media_type="OVA", franchise="F", franchise_order="1"),
            Entry(title="Movie", media_type="Anime Film", franchise="F", franchise_order="01"),
            Entry(title="Alpha", franchise="F", franchise_order="1"),
        ]
        sort_entries(entries)
        assert [(e.title, e.media_type) for e in entries] == [
            ("Alpha", ""), ("Movie", "Anime Film"), ("Movie", "OVA"),
        ]

    def test_unnumbered_after_numbered(self) -> None:
        entries = [
            Entry(title="A side story", franchise="F", franchise_order=""),
            Entry(title="Main", franchise="F", franchise_order="3"),
        ]
        sort_entries(entries)
        assert _titles(entries) == ["Main", "A side story"]

    def test_standalone_natural_titles(self) -> None:
        entries = [Entry(title=t) for t in ["Vol 10", "Vol 9", "Aria", "Vol 1"]]
        sort_entries(entries)
        assert _titles(entries) == ["Aria", "Vol 1", "Vol 9", "Vol 10"]

    def test_exact_ties_keep_insertion_order(self) -> None:
        first = Entry(title="Same", notes="first")
        second = Entry(title="Same", notes="second")
        entries = [first, second]
        sort_entries(entries)
        assert entries[0] is first
        assert entries[1] is second

    def test_sorting_organizes_chapters(self) -> None:
        entry = Entry(title="X")
        for text in ["7", "5", "6"]:
            entry.add_chapter(text, "liked")
        entry.add_chapter("3", "loved")
        entry.add_chapter("1 ~ 2", "loved")
        entries = [entry]
        sort_entries(entries)
        assert entry.liked.serialize() == ["5 ~ 7"]
        assert entry.loved.serialize() == ["1 ~ 3"]

    def test_empty(self) -> None:
        entries: list[Entry] = []
        sort_entries(entries)
        assert entries == []


class TestCatalog:
    def test_catalog_id_format(self) -> None:
        stamp = datetime(2026, 10, 17, 9, 5, 3, 42000)
        assert new_catalog_id(stamp) == "OMM_2026-10-17_09:05:03.042"
        assert Catalog().catalog_id.startswith("OMM_")

    def test_add_and_find(self) -> None:
        catalog = Catalog("OMM_test")
        catalog.add_entry(Entry(title="Monster", media_type="Manga"))
        catalog.add_entry(Entry(title="Monster", media_type="Anime"))
        assert len(catalog) == 2
        found = catalog.find("Monster", "Anime")
        assert found is not None and found.media_type == "Anime"
        assert catalog.find("Monster") is catalog[0]
        assert catalog.find("Pluto") is None

    def test_duplicate_inserts_after_original(self) -> None:
        original = Entry(title="B")
        original.add_chapter("4", "liked")
        catalog = Catalog("OMM_test", [Entry(title="A"), original, Entry(title="C")])
        duplicate = catalog.duplicate_entry(original)
        assert duplicate is not None and duplicate is not original
        assert _titles(list(catalog)) == ["A", "B", "B", "C"]
        duplicate.add_chapter("5", "liked")
        assert original.liked.serialize() == ["4"]

    def test_duplicate_missing(self) -> None:
        catalog = Catalog("OMM_test", [Entry(title="A")])
        assert catalog.duplicate_entry(Entry(title="Z")) is None
        assert len(catalog) == 1

    def test_delete_by_identity(self) -> None:
        catalog = Catalog("OMM_test", [
            Entry(title="A", year="1999"), Entry(title="A", year="2004"),
        ])
        assert catalog.delete_entry(Entry(title="A", year="2004"))
        assert [e.year for e in catalog] == ["1999"]
        assert not catalog.delete_entry(Entry(title="A", year="2004"))

    def test_sort(self) -> None:
        catalog = Catalog("OMM_test", [Entry(title="b"), Entry(title="a", franchise="F")])
        catalog.sort()
        assert _titles(list(catalog)) == ["a", "b"]
