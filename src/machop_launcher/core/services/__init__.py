"""
Service layer between the CLI and the core launch package.
"""

from machop_launcher.core.services.launch import LaunchService

__all__ = ["LaunchService"]
