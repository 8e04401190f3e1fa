"""Exercise plan domain entities: a multi-week program of weekly focus blocks and exercises."""
from typing import List, Optional


class Exercise:
    def __init__(self, name: str = "", sets: str = "", reps: str = "", notes: str = ""):
        self.name = name
        self.sets = sets
        self.reps = reps
        self.notes = notes

    def __str__(self) -> str:
        return f"{self.name} - {self.sets} x {self.reps}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Exercise from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Exercise(
            name=str(d.get("name", "")),
            sets=str(d.get("sets", "")),
            reps=str(d.get("reps", "")),
            notes=str(d.get("notes", "")),
        )

    def to_dict(self):
        return {"name": self.name, "sets": self.sets, "reps": self.reps, "notes": self.notes}


class WeeklyPlan:
    def __init__(self, week: int, focus: str = "", exercises: Optional[List[Exercise]] = None):
        self.week = week
        self.focus = focus
        self.exercises = exercises[:] if exercises else []

    def __str__(self) -> str:
        return f"Week {self.week}: {self.focus} ({len(self.exercises)} exercises)"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return WeeklyPlan(
            week=d.get("week", 0),
            focus=d.get("focus", ""),
            exercises=[Exercise.from_dict(ex) for ex in d.get("exercises", []) or []],
        )

    def to_dict(self):
        return {
            "week": self.week,
            "focus": self.focus,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


class ExercisePlan:
    def __init__(self, plan_title: str = "", duration_weeks: int = 0,
                 weekly_plans: Optional[List[WeeklyPlan]] = None):
        self.plan_title = plan_title
        self.duration_weeks = duration_weeks
        self.weekly_plans = weekly_plans[:] if weekly_plans else []

    def __str__(self) -> str:
        return f"{self.plan_title} - {self.duration_weeks} weeks"

    __repr__ = __str__

    def get_week(self, week: int) -> Optional[WeeklyPlan]:
        '''Returns the weekly block whose week number matches, or None.'''
        for weekly in self.weekly_plans:
            if weekly.week == week:
                return weekly
        return None

    @staticmethod
    def from_dict(data):
        '''Creates an ExercisePlan from its persisted (camelCase) dictionary form.'''
        d = dict(data) if isinstance(data, dict) else {}
        return ExercisePlan(
            plan_title=d.get("planTitle", ""),
            duration_weeks=d.get("durationWeeks", 0),
            weekly_plans=[WeeklyPlan.from_dict(w) for w in d.get("weeklyPlans", []) or []],
        )

    def to_dict(self):
        return {
            "planTitle": self.plan_title,
            "durationWeeks": self.duration_weeks,
            "weeklyPlans": [w.to_dict() for w in self.weekly_plans],
        }
