from datetime import datetime, timezone


class SystemClock:
    """Wall-clock time as naive UTC, the form stored in the database."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock:
    """Clock pinned to a given instant; `advance` moves it forward."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, delta) -> None:
        self.instant = self.instant + delta
