"""
SwiftGuard - MT103 Parsing and Compliance Validation

Parses raw SWIFT MT103 payment messages into structured records, validates
them against a JSON Schema and screens them for sanctioned jurisdictions and
duplicate transaction references.
"""

from .core import __version__

__all__ = ["__version__"]
