"""Constants for task statuses and category colors."""

from enum import Enum
from typing import Union

from app.core.exceptions import InvalidArgumentError


DEFAULT_CATEGORY_COLOR = "#FFFFFF"


class TaskStatus(str, Enum):
    """Enumeration of task statuses."""

    non_started = "Non Started"
    in_progress = "In Progress"
    paused = "Paused"
    late = "Late"
    finished = "Finished"

    @classmethod
    def parse(cls, value: Union["TaskStatus", str]) -> "TaskStatus":
        """
        Resolve a status from a member, its value ("In Progress") or its
        name ("in_progress"), ignoring case.

        Raises:
            InvalidArgumentError: If the value is not a known status.
        """
        if isinstance(value, cls):
            return value
        candidate = (value or "").strip().lower()
        for member in cls:
            if candidate in (member.value.lower(), member.name):
                return member
        allowed = ", ".join(member.value for member in cls)
        raise InvalidArgumentError(f"Invalid status value '{value}'. Allowed: {allowed}")
