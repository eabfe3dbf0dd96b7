from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

POINT_LABEL_PREFIX = "point:"


class NodeKind(Enum):
    """Accepted shapes of a parsed outline node."""

    POINT = "point"  # bare integer shorthand
    LEAF = "leaf"  # mapping with point + comment/assignees
    SEQUENCE = "sequence"  # list of single-key groupings
    MAPPING = "mapping"  # single-key grouping wrapper


@dataclass(frozen=True)
class IssueRecord:
    """One flattened work item, ready to become a tracker issue.

    ``labels`` holds every ancestor category name, outermost first; the
    leaf's own key only appears in ``title``.
    """

    title: str
    point: int
    comment: str | None = None
    assignees: tuple[str, ...] | None = None
    labels: tuple[str, ...] = ()

    @property
    def point_label(self) -> str:
        return f"{POINT_LABEL_PREFIX}{self.point}"

    @property
    def tracker_labels(self) -> list[str]:
        return [*self.labels, self.point_label]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "point": self.point,
            "comment": self.comment,
            "assignees": list(self.assignees) if self.assignees is not None else None,
            "labels": list(self.labels),
        }


__all__ = ["IssueRecord", "NodeKind", "POINT_LABEL_PREFIX"]
