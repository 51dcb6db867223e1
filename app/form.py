# app/form.py
"""
Form Collector: the child rows and scalar fields behind the planning page.

State lives only for one request. The page posts every field back
(child_id_{i}, child_name_{i}, ...), we rebuild the collector, apply the
button that was pressed and render again.
"""
import itertools
from typing import Any, Dict, List, Mapping, Optional

from .planning import ChildRecord, PlanRequest, filled_children, NOT_SPECIFIED
from .prompt import build_preview_summary

PHILOSOPHIES = [
    "Charlotte Mason",
    "Montessori",
    "Classical",
    "Waldorf",
    "Unschooling",
    "Eclectic / Mixed",
]
DEFAULT_PHILOSOPHY = PHILOSOPHIES[0]
NO_CHILD_MESSAGE = "Add at least one child to generate a draft plan."


class FormCollector:
    def __init__(self, children: Optional[List[ChildRecord]] = None,
                 philosophy: str = DEFAULT_PHILOSOPHY, location: str = "", goals: str = ""):
        self.children: List[ChildRecord] = []
        self.philosophy = philosophy
        self.location = location
        self.goals = goals
        start = max([c.id for c in children or [] if isinstance(c.id, int)], default=0) + 1
        self._ids = itertools.count(start)
        if children:
            for c in children:
                if not isinstance(c.id, int):
                    c.id = next(self._ids)
                self.children.append(c)
        else:
            self.add_child()

    # ---- rows ----
    def add_child(self) -> ChildRecord:
        child = ChildRecord(id=next(self._ids))
        self.children.append(child)
        return child

    def update_child(self, child_id: int, field: str, value: str) -> None:
        if field not in ("name", "age", "grade"):
            raise ValueError(f"unknown child field: {field}")
        for c in self.children:
            if c.id == child_id:
                setattr(c, field, value)
                return

    def remove_child(self, child_id: int) -> None:
        # the last row can't be removed, matching the page (no Remove button then)
        if len(self.children) <= 1:
            return
        self.children = [c for c in self.children if c.id != child_id]

    def reset(self) -> None:
        self.children = []
        self.philosophy = DEFAULT_PHILOSOPHY
        self.location = ""
        self.goals = ""
        self.add_child()

    # ---- output ----
    def to_payload(self) -> Dict[str, Any]:
        """Body for POST /api/draft-plan."""
        return {
            "children": [
                {"id": c.id, "name": c.name, "age": c.age, "grade": c.grade}
                for c in self.children
            ],
            "philosophy": self.philosophy,
            "location": self.location,
            "goals": self.goals,
        }

    def preview(self) -> str:
        """Local preview text, or the 'add a child' hint."""
        filled = filled_children(self.children)
        if not filled:
            return NO_CHILD_MESSAGE
        plan = PlanRequest(
            children=filled,
            philosophy=self.philosophy or NOT_SPECIFIED,
            location=self.location or NOT_SPECIFIED,
            goals=self.goals or NOT_SPECIFIED,
        )
        return build_preview_summary(plan)

    # ---- form round-trip ----
    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "FormCollector":
        indexes = set()
        for k in form.keys():
            if k.startswith("child_id_"):
                try:
                    indexes.add(int(k.split("_")[-1]))
                except ValueError:
                    pass

        children = []
        rows = []
        for idx in sorted(indexes):
            try:
                child_id = int(form.get(f"child_id_{idx}") or "")
            except ValueError:
                child_id = None
            record = ChildRecord(id=child_id)
            children.append(record)
            rows.append((idx, record))

        # duplicate ids from a tampered form get fresh ones
        seen = set()
        for c in children:
            if c.id in seen:
                c.id = None
            seen.add(c.id)

        collector = cls(
            children=children,
            philosophy=(form.get("philosophy") or DEFAULT_PHILOSOPHY),
            location=form.get("location") or "",
            goals=form.get("goals") or "",
        )
        # ids are final now; fill each row the same way a per-field edit does
        for idx, record in rows:
            for field in ("name", "age", "grade"):
                collector.update_child(record.id, field, form.get(f"child_{field}_{idx}") or "")
        return collector

    def apply(self, action: str) -> None:
        """Apply a row-editing button. 'preview' / 'generate' are handled by the view."""
        action = (action or "").strip()
        if action == "add":
            self.add_child()
        elif action == "reset":
            self.reset()
        elif action.startswith("remove:"):
            try:
                self.remove_child(int(action.split(":", 1)[1]))
            except ValueError:
                pass
