import unittest
from datetime import datetime, timezone
from physio.domain.ExercisePlan import ExercisePlan, WeeklyPlan
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.PlanHistoryItem import PlanHistoryItem
from physio.domain.User import UserRecord
from physio.domain.errors import MalformedPlanError, ProgressStateError
from physio.logic.program.checks import has_active_program, is_program_complete
from physio.logic.program.lifecycle import accept_plan, complete_plan, record_session
from physio.logic.program.tracker import SESSION_LOGGED, PLAN_COMPLETED, ALREADY_COMPLETE, NOOP


def make_plan(weeks, title):
    return ExercisePlan(title, weeks, [WeeklyPlan(w, f"Focus {w}") for w in range(1, weeks + 1)])


class TestAcceptPlan(unittest.TestCase):

    def setUp(self):
        self.user = UserRecord(id="u1", name="Ana", email="ana@example.com")
        self.now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def test_accept_on_empty_slot(self):
        plan = make_plan(4, "Back Basics")
        updated = accept_plan(self.user, plan)
        self.assertTrue(has_active_program(updated))
        self.assertEqual(updated.active_plan.plan_title, "Back Basics")
        self.assertEqual(updated.progress_data.to_dict(), {
            "progressPercent": 0, "currentWeek": 1, "completedSessions": 0,
            "totalWeeks": 4, "sessionsPerWeek": 3, "weeklyCompletions": [0, 0, 0, 0],
        })
        self.assertEqual(updated.plan_history, [])
        # Original record untouched
        self.assertIsNone(self.user.active_plan)
        self.assertIsNone(self.user.progress_data)

    def test_accept_replaces_active_plan(self):
        old_plan = make_plan(4, "Old Plan")
        earlier = PlanHistoryItem("Older", 2, "2026-01-01T00:00:00.000Z", "Completed")
        user = self.user.replace(
            active_plan=old_plan,
            progress_data=ProgramProgress(42, 2, 5, 4, 3, [3, 2, 0, 0]),
            plan_history=[earlier],
        )
        updated = accept_plan(user, make_plan(6, "New Plan"), now=self.now)

        self.assertEqual(len(updated.plan_history), 2)
        self.assertEqual(updated.plan_history[0], earlier)
        replaced = updated.plan_history[-1]
        self.assertEqual(replaced.plan_title, "Old Plan")
        self.assertEqual(replaced.duration_weeks, 4)
        self.assertEqual(replaced.status, "Replaced")
        self.assertEqual(replaced.completed_date, "2026-10-19T12:00:00.000Z")
        self.assertEqual(updated.active_plan.plan_title, "New Plan")
        self.assertEqual(updated.progress_data.to_dict(), {
            "progressPercent": 0, "currentWeek": 1, "completedSessions": 0,
            "totalWeeks": 6, "sessionsPerWeek": 3, "weeklyCompletions": [0, 0, 0, 0, 0, 0],
        })
        self.assertEqual(len(user.plan_history), 1)

    def test_custom_sessions_per_week(self):
        updated = accept_plan(self.user, make_plan(2, "Short"), sessions_per_week=5)
        self.assertEqual(updated.progress_data.sessions_per_week, 5)

    def test_malformed_plans_are_rejected(self):
        bad_plans = [
            ExercisePlan("Zero", 0, []),
            ExercisePlan("Short", 3, [WeeklyPlan(1), WeeklyPlan(2)]),
            ExercisePlan("Gap", 3, [WeeklyPlan(1), WeeklyPlan(3), WeeklyPlan(4)]),
            ExercisePlan("Unordered", 2, [WeeklyPlan(2), WeeklyPlan(1)]),
        ]
        for plan in bad_plans:
            with self.subTest(plan=plan.plan_title):
                with self.assertRaises(MalformedPlanError):
                    accept_plan(self.user, plan)

    def test_zero_sessions_per_week_rejected(self):
        with self.assertRaises(MalformedPlanError):
            accept_plan(self.user, make_plan(4, "Plan"), sessions_per_week=0)


class TestRecordSession(unittest.TestCase):

    def setUp(self):
        self.user = accept_plan(UserRecord(id="u1", name="Ana"), make_plan(2, "Two Weeks"), sessions_per_week=2)

    def test_logged_session_updates_progress_only(self):
        updated, result = record_session(self.user)
        self.assertEqual(result.status, SESSION_LOGGED)
        self.assertEqual(updated.progress_data.completed_sessions, 1)
        self.assertEqual(updated.active_plan.plan_title, "Two Weeks")
        self.assertEqual(self.user.progress_data.completed_sessions, 0)

    def test_last_session_moves_plan_to_history(self):
        user = self.user
        for _ in range(3):
            user, _ = record_session(user)
        user, result = record_session(user)
        self.assertEqual(result.status, PLAN_COMPLETED)
        self.assertFalse(has_active_program(user))
        self.assertIsNone(user.active_plan)
        self.assertIsNone(user.progress_data)
        self.assertEqual([h.status for h in user.plan_history], ["Completed"])

        # Nothing more to log; history keeps its single completion entry
        again, result = record_session(user)
        self.assertEqual(result.status, NOOP)
        self.assertEqual(len(again.plan_history), 1)

    def test_already_complete_progress_is_left_alone(self):
        done = self.user.replace(progress_data=ProgramProgress(100, 2, 4, 2, 2, [2, 2]))
        self.assertTrue(is_program_complete(done.progress_data))
        updated, result = record_session(done)
        self.assertEqual(result.status, ALREADY_COMPLETE)
        self.assertIs(updated, done)

    def test_inconsistent_stored_progress_is_not_logged(self):
        user = accept_plan(UserRecord(id="u2"), make_plan(4, "Four Weeks"))
        cases = {
            # count claims five sessions but no week has any
            "counts": ProgramProgress(42, 2, 5, 4, 3, [0, 0, 0, 0]),
            # progress sized for a different plan
            "weeks": ProgramProgress(0, 1, 0, 3, 3, [0, 0, 0]),
        }
        for name, progress in cases.items():
            with self.subTest(case=name):
                broken = user.replace(progress_data=progress)
                with self.assertRaises(ProgressStateError):
                    record_session(broken)
                self.assertEqual(broken.progress_data.to_dict(), progress.to_dict())

    def test_complete_plan_requires_completed_status(self):
        item = PlanHistoryItem("Two Weeks", 2, "2026-10-19T00:00:00.000Z", "Replaced")
        with self.assertRaises(ValueError):
            complete_plan(self.user, item)


if __name__ == '__main__':
    unittest.main()
