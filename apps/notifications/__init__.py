"""Notifications app package.

Delivers slot-available messages to parties admitted from a waitlist,
by email through Django's mail backend and by SMS through a pluggable
sender. Every message is stored as a ``Notification`` with its outcome.
Delivery runs in a Celery task after the admission has committed.
"""
