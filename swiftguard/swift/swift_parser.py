"""
SWIFT MT103 Tag Parser

Parses raw MT103 text into a flat record of semantic field names. The parser
is total: any input, including empty strings, block envelope noise and binary
garbage, yields a (possibly empty) record instead of raising. Deciding whether
the record is acceptable is left to the validators.
"""

import logging
import re
from typing import Dict, Optional, Tuple, Union

from swiftguard.swift.swift_codes import ENVELOPE_PREFIXES, TAG_FIELD_MAP

logger = logging.getLogger(__name__)

ParsedRecord = Dict[str, str]


class SwiftParser:
    """
    Line-oriented parser for MT103 field tags.

    Handles:
    - Recognized tag lines (``:20:``, ``:23B:``, ``:32A:`` ...)
    - Multi-line field values (continuation lines)
    - Envelope noise (``{1:...}``, ``-}``, ``{5:{CHK:...}}``)
    - Unrecognized tags, which are dropped together with their continuations
    """

    LINE_SPLIT_PATTERN = re.compile(r"\r?\n")

    # Tag line: :TAG:value
    TAG_PATTERN = re.compile(r"^:[A-Za-z0-9]+:")

    # 32A value: YYMMDD + currency + amount
    FIELD_32A_PATTERN = re.compile(r"^(\d{6})([A-Z]{3})([\d,.]+)$")

    def __init__(self, tag_map: Optional[Dict[str, str]] = None):
        """
        Initialize parser.

        Args:
            tag_map: Tag token to field name mapping, defaults to MT103 tags
        """
        self.tag_map = dict(tag_map) if tag_map is not None else dict(TAG_FIELD_MAP)

    def parse(self, raw_message: Union[str, bytes, None]) -> ParsedRecord:
        """
        Parse a raw MT103 message into a record.

        Args:
            raw_message: Raw message text as submitted

        Returns:
            Mapping of semantic field names to string values
        """
        text = self.to_text(raw_message)
        record: ParsedRecord = {}
        current_field: Optional[str] = None

        for raw_line in self.LINE_SPLIT_PATTERN.split(text):
            line = raw_line.strip()

            match = self.TAG_PATTERN.match(line)
            if match:
                token = match.group(0)
                field_name = self.tag_map.get(token)
                if field_name:
                    record[field_name] = line[len(token):].strip()
                    current_field = field_name
                else:
                    logger.debug(f"Dropping unrecognized tag {token}")
                    current_field = None
            elif current_field and record.get(current_field):
                if not line or line.startswith(ENVELOPE_PREFIXES):
                    continue
                record[current_field] += "\n" + line

        return record

    @staticmethod
    def to_text(raw_message: Union[str, bytes, None]) -> str:
        """Turn any submitted payload into text without raising."""
        if raw_message is None:
            return ""
        if isinstance(raw_message, (bytes, bytearray)):
            return bytes(raw_message).decode("utf-8", errors="replace")
        if not isinstance(raw_message, str):
            return str(raw_message)
        return raw_message

    def parse_field_32a(self, value: str) -> Optional[Tuple[str, str, str]]:
        """
        Split field 32A (Value Date/Currency/Amount).

        Format: YYMMDDCCCAMOUNT (e.g., 230101USD1000,00)

        Returns:
            Tuple of (date, currency, amount) with a dot decimal separator,
            or None if the value does not have that shape
        """
        match = self.FIELD_32A_PATTERN.match(value or "")
        if not match:
            return None

        date, currency, amount = match.groups()
        return date, currency, amount.replace(",", ".")


def parse_swift_message(raw_message: Union[str, bytes, None]) -> ParsedRecord:
    """
    Convenience function to parse an MT103 message.

    Args:
        raw_message: Raw message text

    Returns:
        Parsed record
    """
    return SwiftParser().parse(raw_message)
