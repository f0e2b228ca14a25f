"""Reading id lists and writing snapshot output."""

import csv
import json
from pathlib import Path

from models import DailySnapshot

HISTORY_HEADER = ["date", "id", "totalDownloads", "latestVersion"]


def load_id_list(path: Path) -> list[str]:
    """Load an optional JSON array of package ids.

    Returns an empty list if the file does not exist.

    Raises:
        ValueError: If the file is not valid JSON or not an array.
    """
    if not path.exists():
        return []

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of package ids")

    return [str(item) for item in data if item is not None]


def write_daily_snapshot(snapshot: DailySnapshot, data_dir: Path) -> Path:
    """Write ``<data_dir>/daily/<date>.json``, replacing any earlier run that day."""
    daily_dir = data_dir / "daily"
    daily_dir.mkdir(parents=True, exist_ok=True)
    output_path = daily_dir / f"{snapshot.date_utc}.json"

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_json(), f, indent=2)

    return output_path


def append_history(snapshot: DailySnapshot, csv_path: Path) -> int:
    """Append one row per found package to the rolling history CSV.

    The file is created with a header row if it does not exist yet.

    Returns:
        Number of rows appended.
    """
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    is_new = not csv_path.exists()

    rows = [
        [snapshot.date_utc, pkg.id, pkg.total_downloads, pkg.latest_version]
        for pkg in snapshot.packages
        if pkg.found
    ]

    with open(csv_path, "a", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        if is_new:
            writer.writerow(HISTORY_HEADER)
        writer.writerows(rows)

    return len(rows)
