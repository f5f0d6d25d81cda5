"""
Notifications app.

In-app notifications created by the server (bill invites, finalization,
due-date reminders) and read by clients.
"""
