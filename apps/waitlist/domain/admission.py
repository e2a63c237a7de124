"""
Waitlist Admission

Single pass over the queue in position order. Every party that still fits
into the remaining capacity is admitted; a party that does not fit keeps
its place and the walk goes on, so a smaller party further back may be
admitted ahead of it.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class QueuedParty(ValueObject):
    entry_id: int
    position: int
    party_size: int


@dataclass
class AdmissionPlan:
    admitted: List[QueuedParty] = field(default_factory=list)
    kept: List[QueuedParty] = field(default_factory=list)
    remaining_capacity: int = 0

    @property
    def admitted_count(self) -> int:
        return len(self.admitted)


def plan_admission(queue: Iterable[QueuedParty], available_capacity: int) -> AdmissionPlan:
    """Split ``queue`` into admitted and kept parties for ``available_capacity`` places"""
    plan = AdmissionPlan(remaining_capacity=max(available_capacity, 0))
    for party in sorted(queue, key=lambda p: p.position):
        if party.party_size <= plan.remaining_capacity:
            plan.admitted.append(party)
            plan.remaining_capacity -= party.party_size
        else:
            plan.kept.append(party)
    return plan
