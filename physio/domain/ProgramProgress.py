"""ProgramProgress: derived tracking state (percent, current week, session counts) for the active plan."""
from typing import List, Optional


class ProgramProgress:
    def __init__(self, progress_percent: int = 0, current_week: int = 1, completed_sessions: int = 0,
                 total_weeks: int = 0, sessions_per_week: int = 3,
                 weekly_completions: Optional[List[int]] = None):
        self.progress_percent = progress_percent
        self.current_week = current_week
        self.completed_sessions = completed_sessions
        self.total_weeks = total_weeks
        self.sessions_per_week = sessions_per_week
        self.weekly_completions = weekly_completions[:] if weekly_completions else []

    @property
    def total_sessions(self) -> int:
        return self.total_weeks * self.sessions_per_week

    def __str__(self) -> str:
        return (f"Week {self.current_week}/{self.total_weeks} - "
                f"{self.completed_sessions}/{self.total_sessions} sessions ({self.progress_percent}%)")

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProgramProgress):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ProgramProgress(
            progress_percent=int(d.get("progressPercent", 0)),
            current_week=int(d.get("currentWeek", 1)),
            completed_sessions=int(d.get("completedSessions", 0)),
            total_weeks=int(d.get("totalWeeks", 0)),
            sessions_per_week=int(d.get("sessionsPerWeek", 3)),
            weekly_completions=[int(n) for n in d.get("weeklyCompletions", []) or []],
        )

    def to_dict(self):
        return {
            "progressPercent": self.progress_percent,
            "currentWeek": self.current_week,
            "completedSessions": self.completed_sessions,
            "totalWeeks": self.total_weeks,
            "sessionsPerWeek": self.sessions_per_week,
            "weeklyCompletions": list(self.weekly_completions),
        }
