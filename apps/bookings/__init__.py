"""Bookings app package.

Booking requests against derived slots, the per-slot capacity ledger
that keeps concurrent requests within capacity, recurring booking
templates and the periodic task that closes past bookings. The public
operations of the engine are collected in ``apps.bookings.engine``.
"""
