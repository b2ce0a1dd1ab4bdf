"""
SWIFT MT103 Message Support

Tag-oriented parsing of MT103 Single Customer Credit Transfer messages:
- Field tag definitions and semantic names
- Tolerant line parser (envelope noise, multi-line values)
"""

from swiftguard.swift.swift_codes import (
    MT103Tag,
    TAG_FIELD_MAP,
    MANDATORY_FIELDS,
    OPTIONAL_FIELDS,
    get_field_name,
    get_tag_for_field,
)
from swiftguard.swift.swift_parser import (
    ParsedRecord,
    SwiftParser,
    parse_swift_message,
)

__all__ = [
    # Codes
    "MT103Tag",
    "TAG_FIELD_MAP",
    "MANDATORY_FIELDS",
    "OPTIONAL_FIELDS",
    "get_field_name",
    "get_tag_for_field",
    # Parser
    "ParsedRecord",
    "SwiftParser",
    "parse_swift_message",
]
