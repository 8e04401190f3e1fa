"""UserRecord aggregate: profile, active plan with its progress, plan history and admin inbox.

The record is treated as a value: program operations return a modified copy (see
``replace``) and callers hand that copy to the User Store.
"""
from typing import List, Optional
from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.ProgramProgress import ProgramProgress
from physio.domain.PlanHistoryItem import PlanHistoryItem
from physio.domain.errors import ProgressStateError
from physio.utilities.constants import DEFAULT_PROFILE


class AdminMessage:
    def __init__(self, id: str, text: str, timestamp: str, read: bool = False):
        self.id = id
        self.text = text
        self.timestamp = timestamp
        self.read = read

    def __str__(self) -> str:
        return f"[{'read' if self.read else 'unread'}] {self.text}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return AdminMessage(
            id=d.get("id", ""),
            text=d.get("text", ""),
            timestamp=d.get("timestamp", ""),
            read=bool(d.get("read", False)),
        )

    def to_dict(self):
        return {"id": self.id, "text": self.text, "timestamp": self.timestamp, "read": self.read}


class UserRecord:
    def __init__(self, id: str, name: str = "", email: str = "",
                 age: str = DEFAULT_PROFILE["age"], weight: str = DEFAULT_PROFILE["weight"],
                 height: str = DEFAULT_PROFILE["height"], is_premium: bool = False,
                 active_plan: Optional[ExercisePlan] = None,
                 progress_data: Optional[ProgramProgress] = None,
                 messages_from_admin: Optional[List[AdminMessage]] = None,
                 plan_history: Optional[List[PlanHistoryItem]] = None):
        if (active_plan is None) != (progress_data is None):
            raise ProgressStateError(
                f"User '{id}' must have both an active plan and progress data, or neither")
        self.id = id
        self.name = name
        self.email = email
        self.age = age
        self.weight = weight
        self.height = height
        self.is_premium = is_premium
        self.active_plan = active_plan
        self.progress_data = progress_data
        self.messages_from_admin = messages_from_admin[:] if messages_from_admin else []
        self.plan_history = plan_history[:] if plan_history else []

    def __str__(self) -> str:
        plan = self.active_plan.plan_title if self.active_plan else "no active plan"
        return f"{self.name} <{self.email}> - {plan} - {len(self.plan_history)} past plans"

    __repr__ = __str__

    def replace(self, **changes) -> "UserRecord":
        '''Returns a copy of this record with the given attributes swapped in.'''
        fields = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "weight": self.weight,
            "height": self.height,
            "is_premium": self.is_premium,
            "active_plan": self.active_plan,
            "progress_data": self.progress_data,
            "messages_from_admin": self.messages_from_admin,
            "plan_history": self.plan_history,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"Unknown UserRecord fields: {', '.join(sorted(unknown))}")
        fields.update(changes)
        return UserRecord(**fields)

    @staticmethod
    def from_dict(data):
        '''Creates a UserRecord from the persisted dictionary, filling profile defaults.'''
        d = dict(data) if isinstance(data, dict) else {}
        plan = d.get("activePlan")
        progress = d.get("progressData")
        return UserRecord(
            id=d.get("id", ""),
            name=d.get("name", ""),
            email=d.get("email", ""),
            age=d.get("age") or DEFAULT_PROFILE["age"],
            weight=d.get("weight") or DEFAULT_PROFILE["weight"],
            height=d.get("height") or DEFAULT_PROFILE["height"],
            is_premium=bool(d.get("isPremium", False)),
            active_plan=ExercisePlan.from_dict(plan) if plan is not None else None,
            progress_data=ProgramProgress.from_dict(progress) if progress is not None else None,
            messages_from_admin=[AdminMessage.from_dict(m) for m in d.get("messagesFromAdmin", []) or []],
            plan_history=[PlanHistoryItem.from_dict(h) for h in d.get("planHistory", []) or []],
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "weight": self.weight,
            "height": self.height,
            "isPremium": self.is_premium,
            "activePlan": self.active_plan.to_dict() if self.active_plan else None,
            "progressData": self.progress_data.to_dict() if self.progress_data else None,
            "messagesFromAdmin": [m.to_dict() for m in self.messages_from_admin],
            "planHistory": [h.to_dict() for h in self.plan_history],
        }
