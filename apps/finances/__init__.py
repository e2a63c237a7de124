"""Finances app package.

The transaction subsystem the booking engine talks to: a monetary
transaction is opened together with every accepted booking request and
marked succeeded once the booking is confirmed with a payment reference.
Payment capture itself happens outside this project.
"""
