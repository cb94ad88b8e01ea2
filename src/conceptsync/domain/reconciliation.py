"""Set reconciliation between desired and observed collection references."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import Reference


@dataclass(frozen=True, slots=True)
class ReconciliationPlan:
    """Additions and deletions that turn the observed set into the desired one."""

    to_add: tuple[Reference, ...]
    to_delete: tuple[Reference, ...]
    already_present: tuple[Reference, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_delete


def reconcile(desired: Iterable[Reference], observed: Iterable[Reference]) -> ReconciliationPlan:
    """Compute ``(desired - observed, observed - desired)``.

    Additions keep the iteration order of ``desired`` and deletions the order of
    ``observed``; duplicates in either input collapse to their first occurrence.
    """

    desired_refs = _unique(desired)
    observed_refs = _unique(observed)
    observed_set = set(observed_refs)
    desired_set = set(desired_refs)

    return ReconciliationPlan(
        to_add=tuple(ref for ref in desired_refs if ref not in observed_set),
        to_delete=tuple(ref for ref in observed_refs if ref not in desired_set),
        already_present=tuple(ref for ref in desired_refs if ref in observed_set),
    )


def _unique(references: Iterable[Reference]) -> list[Reference]:
    return list(dict.fromkeys(references))
