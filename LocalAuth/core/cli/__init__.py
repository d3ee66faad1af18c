"""
Terminal presentation for the auth core.
"""

from .terminal import TerminalAuthClient

__all__ = ['TerminalAuthClient']
