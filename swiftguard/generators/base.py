"""
SwiftGuard - Message Generator Base

Abstract interface for components that produce sample MT103 messages.
"""

from abc import ABC, abstractmethod
from enum import Enum


class MessageKind(str, Enum):
    """Kind of sample message to produce."""

    VALID = "valid"
    INVALID = "invalid"
    SANCTIONED = "sanctioned"


class MessageGenerator(ABC):
    """Base class for MT103 message generators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Generator name used in logs and metrics."""
        pass

    @abstractmethod
    def generate(self, kind: MessageKind = MessageKind.VALID) -> str:
        """
        Produce one raw MT103 message.

        Args:
            kind: Which kind of message to produce

        Returns:
            Raw message text
        """
        pass

    def generate_valid(self) -> str:
        return self.generate(MessageKind.VALID)

    def generate_invalid(self) -> str:
        return self.generate(MessageKind.INVALID)

    def generate_sanctioned(self) -> str:
        return self.generate(MessageKind.SANCTIONED)
