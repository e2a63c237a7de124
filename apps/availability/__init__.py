"""Availability app package.

Recurring weekly availability rules and their per-date exceptions, and
the read side that projects them into concrete bookable slots with their
current occupancy.
"""
