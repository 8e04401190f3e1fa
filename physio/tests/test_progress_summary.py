import unittest
from physio.domain.ExercisePlan import ExercisePlan, WeeklyPlan, Exercise
from physio.domain.PlanHistoryItem import PlanHistoryItem
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.User import UserRecord
from physio.logic.program.lifecycle import accept_plan, record_session
from physio.logic.reporting.progress_summary import build_progress_summary, remaining_sessions_in_week


class TestProgressSummary(unittest.TestCase):

    def setUp(self):
        plan = ExercisePlan("Hip Recovery", 3, [
            WeeklyPlan(1, "Mobility", [Exercise("Bridges", "3", "12", "")]),
            WeeklyPlan(2, "Strength", [Exercise("Clamshells", "3", "15", "")]),
            WeeklyPlan(3, "Balance", []),
        ])
        self.user = accept_plan(UserRecord(id="u1", name="Ana"), plan)

    def test_no_plan(self):
        summary = build_progress_summary(UserRecord(id="u2"))
        self.assertEqual(summary["state"], "no_plan")
        self.assertEqual(summary["history"]["counts"], {"Completed": 0, "Replaced": 0})

    def test_active_plan_after_one_week(self):
        user = self.user
        for _ in range(3):
            user, _ = record_session(user)
        summary = build_progress_summary(user)
        self.assertEqual(summary["state"], "active")
        self.assertEqual(summary["progress"]["week_label"], "Week 2/3")
        self.assertEqual(summary["progress"]["completed_sessions"], 3)
        self.assertEqual(summary["progress"]["total_sessions"], 9)
        # Right after a week boundary the widget shows 0 left
        self.assertEqual(summary["progress"]["sessions_left_this_week"], 0)
        self.assertEqual(summary["chart"], {"labels": ["W1", "W2", "W3"], "data": [3, 0, 0], "target": 3})
        self.assertEqual(summary["current_week_plan"]["focus"], "Strength")

    def test_history_newest_first(self):
        user = self.user.replace(plan_history=[
            PlanHistoryItem("First", 4, "2026-01-01T00:00:00.000Z", "Completed"),
            PlanHistoryItem("Second", 4, "2026-03-01T00:00:00.000Z", "Replaced"),
        ])
        history = build_progress_summary(user)["history"]
        self.assertEqual([h["planTitle"] for h in history["items"]], ["Second", "First"])
        self.assertEqual(history["counts"], {"Completed": 1, "Replaced": 1})

    def test_remaining_sessions(self):
        self.assertEqual(remaining_sessions_in_week(ProgramProgress(0, 1, 0, 3, 3, [0, 0, 0])), 3)
        self.assertEqual(remaining_sessions_in_week(ProgramProgress(44, 2, 4, 3, 3, [3, 1, 0])), 2)
        self.assertEqual(remaining_sessions_in_week(ProgramProgress(100, 3, 9, 3, 3, [3, 3, 3])), 0)


if __name__ == '__main__':
    unittest.main()
