"""
Chat app.

Per-bill message threads. Clients poll for new messages; payment slips
posted here are verified by the bill host.
"""
