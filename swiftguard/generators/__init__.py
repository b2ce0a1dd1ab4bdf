"""
SwiftGuard - Message Generators
"""

from .base import MessageGenerator, MessageKind
from .factory import create_generator
from .llm_generator import LLMMessageGenerator, strip_markdown
from .template_generator import TemplateMessageGenerator

__all__ = [
    "MessageGenerator",
    "MessageKind",
    "TemplateMessageGenerator",
    "LLMMessageGenerator",
    "create_generator",
    "strip_markdown",
]
