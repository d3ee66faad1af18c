"""
LocalAuth - a client-local authentication front end.

Register, log in, log out and request a (simulated) password reset against an
account collection kept entirely in a local key/value store.
"""

__version__ = "0.1.0"
