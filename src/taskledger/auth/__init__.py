"""Authentication and authorization.

Cookie sessions backed by the database:
1. register/login → bcrypt-verified credentials (credentials.py)
2. login → opaque session token stored server-side (sessions.py)
3. every protected route → session cookie resolved to a user (dependencies.py)
"""
