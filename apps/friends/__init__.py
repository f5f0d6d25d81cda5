"""
Friends App - Friend Requests and Friendships

Users find each other by username, exchange friend requests and keep a
symmetric friend list. Bill participants are picked from this list.
"""
