"""PlanHistoryItem: immutable snapshot of a plan that ended by completion or replacement."""
from physio.utilities.constants import HISTORY_STATUSES


class PlanHistoryItem:
    __slots__ = ("_plan_title", "_duration_weeks", "_completed_date", "_status")

    def __init__(self, plan_title: str, duration_weeks: int, completed_date: str, status: str):
        if status not in HISTORY_STATUSES:
            raise ValueError(f"Unknown history status: {status}")
        self._plan_title = plan_title
        self._duration_weeks = duration_weeks
        self._completed_date = completed_date
        self._status = status

    # Read-only accessors; history entries are never edited once recorded
    @property
    def plan_title(self) -> str:
        return self._plan_title

    @property
    def duration_weeks(self) -> int:
        return self._duration_weeks

    @property
    def completed_date(self) -> str:
        return self._completed_date

    @property
    def status(self) -> str:
        return self._status

    def __str__(self) -> str:
        return f"{self.plan_title} ({self.duration_weeks} weeks) - {self.status} on {self.completed_date}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlanHistoryItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self._plan_title, self._duration_weeks, self._completed_date, self._status))

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return PlanHistoryItem(
            plan_title=d.get("planTitle", ""),
            duration_weeks=d.get("durationWeeks", 0),
            completed_date=d.get("completedDate", ""),
            status=d.get("status", ""),
        )

    def to_dict(self):
        return {
            "planTitle": self.plan_title,
            "durationWeeks": self.duration_weeks,
            "completedDate": self.completed_date,
            "status": self.status,
        }
