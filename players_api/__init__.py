"""
Players API Application Package.

This package contains the application logic for the player management
service: player storage, validation, password hashing and event delivery.
"""

__version__ = "1.0.0"
