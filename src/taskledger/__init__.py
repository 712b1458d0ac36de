"""taskledger — task and account tracking backend.

REST API for user registration, cookie-session login, and per-user
task and account records.
"""

__version__ = "0.1.0"
