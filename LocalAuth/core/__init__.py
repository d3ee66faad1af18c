"""
Core package for LocalAuth: logging, shared utilities and the auth state machine.
"""
