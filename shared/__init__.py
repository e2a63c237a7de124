"""
Shared Kernel

Base classes and utilities shared by the availability, bookings and
waitlist contexts: domain building blocks, value objects, the unit of
work, the message bus and the Result boundary type.
"""
