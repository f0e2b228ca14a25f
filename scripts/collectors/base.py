"""Base collector class and utilities."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Optional

import requests

from models import DailySnapshot, PackageSnapshot

USER_AGENT = "cerbi-nuget-trends/1.1"


def get_session(user_agent: str = USER_AGENT) -> requests.Session:
    """Create a requests session that identifies itself on every request."""
    session = requests.Session()
    session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
    return session


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class BaseCollector(ABC):
    """Abstract base class for package snapshot collectors."""

    source_name: str = "unknown"

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or get_session()
        self.errors: list[str] = []
        self.warnings: list[str] = []

    @abstractmethod
    def collect(self) -> list[PackageSnapshot]:
        """Collect snapshot records for every tracked package.

        Returns:
            Records in tracked-id order.
        """
        pass

    def run(self, today: Optional[date] = None) -> DailySnapshot:
        """Run collection and wrap the records in a dated snapshot.

        Args:
            today: Snapshot date. Defaults to the current UTC date.

        Returns:
            The daily snapshot.
        """
        packages = self.collect()
        snapshot_date = today or utc_today()
        return DailySnapshot(date_utc=snapshot_date.isoformat(), packages=packages)
