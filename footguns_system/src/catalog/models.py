"""
Footgun record types.

A record is one documented pitfall. Records are immutable once loaded; a
status change produces a new record via ``transition``.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..exceptions import InvalidStatusTransitionError


class FootgunStatus(Enum):
    OPEN = "open"
    FIXED_UPSTREAM = "fixed-upstream"
    BY_DESIGN = "by-design-workaround-required"


# fixed-upstream is terminal
ALLOWED_TRANSITIONS = {
    FootgunStatus.OPEN: {FootgunStatus.FIXED_UPSTREAM, FootgunStatus.BY_DESIGN},
    FootgunStatus.BY_DESIGN: {FootgunStatus.FIXED_UPSTREAM},
    FootgunStatus.FIXED_UPSTREAM: set(),
}


@dataclass(frozen=True)
class Remedy:
    """A proposed fix. Order within a record is meaningful."""
    label: str
    guidance: str
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"label": self.label, "guidance": self.guidance}
        if self.code is not None:
            data["code"] = self.code
        return data


@dataclass(frozen=True)
class Reproduction:
    """Example scenario text, optionally with an illustrative code snippet."""
    scenario: str
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"scenario": self.scenario}
        if self.code is not None:
            data["code"] = self.code
        return data


@dataclass(frozen=True)
class FootgunRecord:
    """One documented framework pitfall."""
    id: int
    framework: str
    title: str
    status: FootgunStatus
    explanation: str
    reproduction: Reproduction
    remedies: Tuple[Remedy, ...] = ()
    fixed_in: Optional[str] = None
    notes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_open(self) -> bool:
        return self.status == FootgunStatus.OPEN

    @property
    def primary_remedy(self) -> Optional[Remedy]:
        return self.remedies[0] if self.remedies else None

    def transition(
        self,
        status: FootgunStatus,
        fixed_in: Optional[str] = None,
        note: Optional[str] = None,
    ) -> "FootgunRecord":
        """
        Return a copy of this record moved to ``status``.

        Moving to fixed-upstream records ``fixed_in`` and appends a
        "Fixed in" note so the record keeps its history.
        """
        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransitionError(self.id, self.status.value, status.value)
        # only open records may have no remedy
        if status != FootgunStatus.OPEN and not self.remedies:
            raise InvalidStatusTransitionError(
                self.id, self.status.value, status.value,
                reason="a resolved footgun needs at least one remedy"
            )
        if status == FootgunStatus.FIXED_UPSTREAM and not (fixed_in and fixed_in.strip()):
            raise InvalidStatusTransitionError(
                self.id, self.status.value, status.value,
                reason="fixed_in version is required"
            )

        notes = list(self.notes)
        if status == FootgunStatus.FIXED_UPSTREAM:
            fixed_in = fixed_in.strip()
            notes.append(f"Fixed in {self.framework} {fixed_in}")
        if note:
            notes.append(note)

        return replace(
            self,
            status=status,
            fixed_in=fixed_in if status == FootgunStatus.FIXED_UPSTREAM else self.fixed_in,
            notes=tuple(notes),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "framework": self.framework,
            "title": self.title,
            "status": self.status.value,
            "explanation": self.explanation,
            "reproduction": self.reproduction.to_dict(),
            "remedies": [r.to_dict() for r in self.remedies],
        }
        if self.fixed_in is not None:
            data["fixed_in"] = self.fixed_in
        if self.notes:
            data["notes"] = list(self.notes)
        return data
