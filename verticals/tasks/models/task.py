"""Task record for the tasks vertical.

Tasks live only in memory. The to_dict() method provides the JSON shape
used by the router; fields injected by a partial update are carried in
`extra` and rendered alongside the standard ones.
"""

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Callable, Mapping

STANDARD_FIELDS = ("id", "title", "description", "due_date", "completed", "priority")


@dataclass
class Task:
    """A to-do item."""

    id: Any
    title: Any
    description: Any
    due_date: Any  # YYYY-MM-DD, stored as given
    priority: Any
    completed: Any = False
    extra: dict[str, Any] = field(default_factory=dict)

    def get_field(self, name: str, default: Any = None) -> Any:
        accessor = FIELD_ACCESSORS.get(name)
        if accessor is not None:
            return accessor(self)
        return self.extra.get(name, default)

    def apply(self, fields: Mapping[str, Any]) -> None:
        for name, value in fields.items():
            if name in FIELD_ACCESSORS:
                setattr(self, name, value)
            else:
                self.extra[name] = value

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date,
            "completed": self.completed,
            "priority": self.priority,
        }
        data.update(self.extra)
        return data


FIELD_ACCESSORS: dict[str, Callable[[Task], Any]] = {
    name: attrgetter(name) for name in STANDARD_FIELDS
}
