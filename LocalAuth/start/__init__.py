"""
Startup helpers invoked by the command-line entry point.
"""

from .client import client, run_client, list_users, whoami, logout

__all__ = ['client', 'run_client', 'list_users', 'whoami', 'logout']
