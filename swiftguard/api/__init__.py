"""
SwiftGuard - API Module
"""

from .rest import create_app, run_server, status_code_for

__all__ = ["create_app", "run_server", "status_code_for"]
