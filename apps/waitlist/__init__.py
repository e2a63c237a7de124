"""Waitlist app package.

Ordered queue of parties waiting for capacity on a full slot, and the
single-pass admission that hands freed places to the parties that fit.
"""
