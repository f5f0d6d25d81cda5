"""
Accounts App - Users and Authentication

Email/password login with JWT tokens, public usernames for friend
requests, profile updates, user search and account deletion.
"""
