from __future__ import annotations

from django.test import SimpleTestCase

from apps.waitlist.domain.admission import QueuedParty, plan_admission


def queue(*sizes: int) -> list[QueuedParty]:
    return [QueuedParty(entry_id=index, position=index, party_size=size) for index, size in enumerate(sizes, 1)]


class PlanAdmissionTests(SimpleTestCase):
    def test_smaller_party_further_back_is_admitted(self) -> None:
        plan = plan_admission(queue(3, 2, 1), 2)

        self.assertEqual(plan.admitted_count, 1)
        self.assertEqual([party.party_size for party in plan.admitted], [2])
        self.assertEqual([party.party_size for party in plan.kept], [3, 1])
        self.assertEqual(plan.remaining_capacity, 0)

    def test_walk_continues_after_a_skip(self) -> None:
        plan = plan_admission(queue(4, 1, 1, 2), 3)

        self.assertEqual([party.position for party in plan.admitted], [2, 3])
        self.assertEqual([party.position for party in plan.kept], [1, 4])

    def test_queue_is_walked_in_position_order(self) -> None:
        parties = list(reversed(queue(1, 1, 1)))

        plan = plan_admission(parties, 2)

        self.assertEqual([party.position for party in plan.admitted], [1, 2])

    def test_no_capacity_admits_nobody(self) -> None:
        plan = plan_admission(queue(1, 1), 0)

        self.assertEqual(plan.admitted_count, 0)
        self.assertEqual(len(plan.kept), 2)
