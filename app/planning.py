# app/planning.py
"""
Input normalization for draft plans.

Turns whatever the browser posted into a PlanRequest: drops empty child
rows, applies "Not specified" defaults and renders the per-child
descriptors used by every summary variant.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import ValidationError

NOT_SPECIFIED = "Not specified"
SCALAR_FIELDS = ("philosophy", "location", "goals")
CHILD_FIELDS = ("name", "age", "grade")


def _text(value: Any) -> str:
    # JSON may send null or a bare number for age; treat both as text
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass
class ChildRecord:
    id: Optional[int] = None
    name: str = ""
    age: str = ""
    grade: str = ""
    # exact object we were sent, echoed back in `normalized`
    source: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ChildRecord":
        return cls(
            id=raw.get("id"),
            name=_text(raw.get("name")),
            age=_text(raw.get("age")),
            grade=_text(raw.get("grade")),
            source=dict(raw),
        )

    def is_filled(self) -> bool:
        return any(getattr(self, f).strip() for f in CHILD_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        if self.source is not None:
            return dict(self.source)
        return {"id": self.id, "name": self.name, "age": self.age, "grade": self.grade}


@dataclass
class PlanRequest:
    children: List[ChildRecord]
    philosophy: str = NOT_SPECIFIED
    location: str = NOT_SPECIFIED
    goals: str = NOT_SPECIFIED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "children": [c.to_dict() for c in self.children],
            "philosophy": self.philosophy,
            "location": self.location,
            "goals": self.goals,
        }


def _scalar(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if isinstance(value, str) and value:
        return value
    return NOT_SPECIFIED


def filled_children(children: Any) -> List[ChildRecord]:
    """Keep rows with at least one non-blank field, in the order given."""
    if not isinstance(children, list):
        return []
    out = []
    for c in children:
        if isinstance(c, ChildRecord):
            record = c
        elif isinstance(c, Mapping):
            record = ChildRecord.from_raw(c)
        else:
            continue
        if record.is_filled():
            out.append(record)
    return out


def normalize_payload(raw: Any) -> PlanRequest:
    """
    Validate a decoded request body.
    Raises ValidationError when no child row has any data.
    """
    if not isinstance(raw, Mapping):
        raw = {}
    children = filled_children(raw.get("children"))
    if not children:
        raise ValidationError()
    return PlanRequest(
        children=children,
        philosophy=_scalar(raw, "philosophy"),
        location=_scalar(raw, "location"),
        goals=_scalar(raw, "goals"),
    )


def describe_child(child: ChildRecord, position: int) -> str:
    # position is 1-based among filled children
    name = child.name.strip() or f"Child {position}"
    age = child.age.strip() or "?"
    grade = child.grade.strip() or "?"
    return f"{name} (age {age}, grade {grade})"


def describe_children(children: List[ChildRecord]) -> str:
    """e.g. "Emma (age 10, grade 4), Child 2 (age 7, grade ?)" """
    return ", ".join(describe_child(c, i) for i, c in enumerate(children, start=1))
