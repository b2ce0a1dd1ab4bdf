"""
SwiftGuard - Template Message Generator

Deterministic offline generator. Each message gets a fresh transaction
reference so repeated calls never collide in the dedup ledger.
"""

import itertools
import logging
import threading
import time
from typing import Optional

from .base import MessageGenerator, MessageKind

logger = logging.getLogger(__name__)


VALID_TEMPLATE = """:20:{reference}
:23B:CRED
:32A:240101USD1000,
:50K:John Smith
12 High Street, London
:59:Jane Doe
45 Market Road, Dublin
:70:INVOICE 2024-001
:71A:OUR"""

# Missing :23B: and :71A:
INVALID_TEMPLATE = """:20:{reference}
:32A:240101USD500,
:50K:Invalid User"""

SANCTIONED_TEMPLATE = """:20:{reference}
:23B:CRED
:32A:240101USD25000,
:50K:Trading House Ltd
Rotterdam
:59:Ali Rezaei
Tehran, Iran
:71A:SHA"""


class TemplateMessageGenerator(MessageGenerator):
    """Produces MT103 messages from fixed templates."""

    TEMPLATES = {
        MessageKind.VALID: ("REF", VALID_TEMPLATE),
        MessageKind.INVALID: ("INV", INVALID_TEMPLATE),
        MessageKind.SANCTIONED: ("SAN", SANCTIONED_TEMPLATE),
    }

    def __init__(self, reference_prefix: str = ""):
        self.reference_prefix = reference_prefix
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "template"

    def generate(self, kind: MessageKind = MessageKind.VALID) -> str:
        kind = MessageKind(kind)
        prefix, template = self.TEMPLATES[kind]
        reference = self.next_reference(prefix)

        logger.debug(f"Generated {kind.value} template message {reference}")
        return template.format(reference=reference)

    def next_reference(self, prefix: Optional[str] = None) -> str:
        """Unique reference: prefix, epoch milliseconds and a sequence number."""
        with self._lock:
            sequence = next(self._sequence)

        parts = [p for p in (prefix or "REF", self.reference_prefix) if p]
        parts.append(str(int(time.time() * 1000)))
        parts.append(str(sequence))
        return "_".join(parts)
