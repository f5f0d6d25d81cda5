"""
Bills app.

Shared bills with items, participants, per-item selections and the
select -> pay -> closed lifecycle.
"""
