from typing import Final

STATUS_COMPLETED: Final[str] = "Completed"
STATUS_REPLACED: Final[str] = "Replaced"
HISTORY_STATUSES: Final[tuple[str, ...]] = (STATUS_COMPLETED, STATUS_REPLACED)

DEFAULT_PROFILE: Final[dict[str, str]] = {"age": "30", "weight": "70", "height": "175"}
GUEST_USER_ID: Final[str] = "guest_user"
GUEST_USER_NAME: Final[str] = "Guest User"
GUEST_USER_EMAIL: Final[str] = "guest@physcio.com"

PROMPT_TEMPLATE: Final[str] = (
    """
    Create a personalized 4-week physiotherapy exercise plan for the patient described above.
    Respond ONLY with JSON in the following format:

    """
)
PLAN_JSON_FORMAT: Final[str] = (
    """
{
    "planTitle": str (a catchy title for the plan),
    "durationWeeks": int (total duration in weeks, should be 4),
    "weeklyPlans": [
      {
        "week": int (1, 2, 3 or 4, in order),
        "focus": str (main focus, e.g. 'Mobility and Pain Reduction'),
        "exercises": [
          {
            "name": str,
            "sets": str (e.g. '3'),
            "reps": str (e.g. '10-12'),
            "notes": str (brief instructions)
          },
        ]
      },
    ]
  }
    """
)
