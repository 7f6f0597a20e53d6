"""
NoteVault Backend - Personal Note Taking Service

Multi-user note storage with session-based authentication and
strict per-user isolation of notes.

Version: 1.0.0
"""

__version__ = "1.0.0"
