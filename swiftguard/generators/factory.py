"""
SwiftGuard - Generator Factory
"""

import logging
from typing import Optional

from ..core.config import GeneratorConfig, GeneratorProvider, get_config
from .base import MessageGenerator
from .llm_generator import LLMMessageGenerator
from .template_generator import TemplateMessageGenerator

logger = logging.getLogger(__name__)


def create_generator(config: Optional[GeneratorConfig] = None) -> MessageGenerator:
    """Build the message generator selected by ``generator.provider``."""
    if config is None:
        config = get_config().generator

    provider = GeneratorProvider(config.provider)
    logger.info(f"Using {provider.value} message generator")

    if provider == GeneratorProvider.TEMPLATE:
        return TemplateMessageGenerator()
    return LLMMessageGenerator(config)
