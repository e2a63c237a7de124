"""
Waitlist Domain Events

Published after the admission transaction commits; the notifications
app turns them into slot-available messages.
"""

from dataclasses import dataclass
from datetime import date, time

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class WaitlistAdmitted(DomainEvent):
    """A waiting party was handed places on a slot and removed from the queue"""
    user_id: int
    content_id: str
    slot_date: date
    slot_time: time
    party_size: int
    position: int
    contact_email: str = ''
    contact_phone: str = ''

    def slot_details(self) -> dict:
        return {
            'content_id': self.content_id,
            'date': self.slot_date.isoformat(),
            'time': self.slot_time.strftime('%H:%M'),
            'party_size': self.party_size,
        }
