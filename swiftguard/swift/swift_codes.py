"""
SWIFT MT103 Field Codes

Defines the MT103 field tags understood by the parser and their mapping to
semantic record field names.
"""

from enum import Enum
from typing import Dict, List, Optional


class MT103Tag(Enum):
    """MT103 field tags recognized by the tag parser."""

    # (tag token, semantic name, description, SWIFT format, mandatory)
    F20 = (":20:", "transactionReference", "Sender's Reference", "16x", True)
    F23B = (":23B:", "bankOperationCode", "Bank Operation Code", "4!c", True)
    F32A = (
        ":32A:",
        "valueDateCurrencyAmount",
        "Value Date/Currency/Interbank Settled Amount",
        "6!n3!a15d",
        True,
    )
    F50K = (":50K:", "orderingCustomer", "Ordering Customer - Name and Address", "[/34x]4*35x", True)
    F59 = (":59:", "beneficiaryCustomer", "Beneficiary Customer", "[/34x]4*35x", True)
    F71A = (":71A:", "charges", "Details of Charges", "3!a", True)
    F70 = (":70:", "remittanceInfo", "Remittance Information", "4*35x", False)

    def __init__(
        self,
        token: str,
        field_name: str,
        description: str,
        swift_format: str,
        mandatory: bool,
    ):
        self.token = token
        self.field_name = field_name
        self.description = description
        self.swift_format = swift_format
        self.mandatory = mandatory

    @property
    def tag(self) -> str:
        """Tag code without the surrounding colons (e.g. ``32A``)."""
        return self.token.strip(":")


# Tag token -> semantic field name
TAG_FIELD_MAP: Dict[str, str] = {tag.token: tag.field_name for tag in MT103Tag}

MANDATORY_FIELDS: List[str] = [tag.field_name for tag in MT103Tag if tag.mandatory]

OPTIONAL_FIELDS: List[str] = [tag.field_name for tag in MT103Tag if not tag.mandatory]

# Lines beginning with these characters are block envelope noise
ENVELOPE_PREFIXES = ("{", "}", "-")


def get_field_name(token: str) -> Optional[str]:
    """Get the semantic field name for a tag token such as ``:32A:``."""
    return TAG_FIELD_MAP.get(token)


def get_tag_for_field(field_name: str) -> Optional[MT103Tag]:
    """Get the tag definition for a semantic field name."""
    for tag in MT103Tag:
        if tag.field_name == field_name:
            return tag
    return None
