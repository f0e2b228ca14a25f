import json

import pytest

from models import DailySnapshot, PackageSnapshot, SearchResultEntry
from storage import append_history, load_id_list, write_daily_snapshot


def _snapshot(day: str = "2024-05-01") -> DailySnapshot:
    return DailySnapshot(
        date_utc=day,
        packages=[
            PackageSnapshot.from_entry(
                SearchResultEntry(id="Cerbi.Core", total_downloads=500, version="1.2.0")
            ),
            PackageSnapshot.missing("Cerbi.Extra", "Not found in search results"),
        ],
    )


def test_write_daily_snapshot(tmp_path) -> None:
    path = write_daily_snapshot(_snapshot(), tmp_path)

    assert path == tmp_path / "daily" / "2024-05-01.json"
    text = path.read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    data = json.loads(text)
    assert data["dateUtc"] == "2024-05-01"
    assert [p["id"] for p in data["packages"]] == ["Cerbi.Core", "Cerbi.Extra"]


def test_write_daily_snapshot_overwrites_same_day(tmp_path) -> None:
    write_daily_snapshot(_snapshot(), tmp_path)
    path = write_daily_snapshot(DailySnapshot(date_utc="2024-05-01"), tmp_path)
    assert json.loads(path.read_text(encoding="utf-8"))["packages"] == []


def test_append_history_creates_header_once(tmp_path) -> None:
    csv_path = tmp_path / "nuget_daily_totals.csv"

    assert append_history(_snapshot("2024-05-01"), csv_path) == 1
    assert append_history(_snapshot("2024-05-02"), csv_path) == 1

    assert csv_path.read_text(encoding="utf-8").splitlines() == [
        "date,id,totalDownloads,latestVersion",
        "2024-05-01,Cerbi.Core,500,1.2.0",
        "2024-05-02,Cerbi.Core,500,1.2.0",
    ]


def test_append_history_same_day_duplicates_rows(tmp_path) -> None:
    csv_path = tmp_path / "history.csv"
    append_history(_snapshot(), csv_path)
    append_history(_snapshot(), csv_path)
    assert len(csv_path.read_text(encoding="utf-8").splitlines()) == 3


def test_load_id_list_missing_file(tmp_path) -> None:
    assert load_id_list(tmp_path / "packages.override.json") == []


def test_load_id_list(tmp_path) -> None:
    path = tmp_path / "ids.json"
    path.write_text('["Cerbi.Extra", null, 12]', encoding="utf-8")
    assert load_id_list(path) == ["Cerbi.Extra", "12"]


def test_load_id_list_rejects_non_array(tmp_path) -> None:
    path = tmp_path / "ids.json"
    path.write_text('{"ids": []}', encoding="utf-8")
    with pytest.raises(ValueError, match="JSON array"):
        load_id_list(path)
