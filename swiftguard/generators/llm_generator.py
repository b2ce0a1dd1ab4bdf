"""
SwiftGuard - LLM Message Generator

Generates MT103 messages through any OpenAI-compatible chat completion API
(OpenAI, Groq, DeepSeek, Gemini). Falls back to the template generator when no API
key is configured or the provider call fails.
"""

import logging
import re
from typing import Any, Dict, Optional

import openai
from prometheus_client import Counter

from ..core.config import GeneratorConfig, GeneratorProvider
from ..core.exceptions import GeneratorException
from .base import MessageGenerator, MessageKind
from .template_generator import TemplateMessageGenerator

logger = logging.getLogger(__name__)

GENERATOR_REQUESTS = Counter(
    "swiftguard_generator_requests_total",
    "Message generation requests",
    ["provider", "kind", "status"],
)


# Provider defaults for OpenAI-compatible endpoints
PROVIDER_DEFAULTS: Dict[GeneratorProvider, Dict[str, Optional[str]]] = {
    GeneratorProvider.OPENAI: {"base_url": None, "model": "gpt-4o-mini"},
    GeneratorProvider.GROQ: {
        "base_url": "https://api.groq.com/openai/v1",
        "model": "llama-3.3-70b-versatile",
    },
    GeneratorProvider.DEEPSEEK: {
        "base_url": "https://api.deepseek.com",
        "model": "deepseek-chat",
    },
    GeneratorProvider.GEMINI: {
        "base_url": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "model": "gemini-2.5-flash",
    },
}

PROMPTS = {
    MessageKind.VALID: (
        "Generate a valid SWIFT MT103 message. It MUST contain strict SWIFT tags.\n"
        "Mandatory tags: :20:, :23B:, :32A:, :50K:, :59:, :71A:.\n"
        "Output ONLY the message content, no markdown, no explanations.\n"
        "Example format:\n"
        ":20:REF12345\n"
        ":23B:CRED\n"
        ":32A:230101USD1000,\n"
        ":50K:ORDERING CUST\n"
        "ADDRESS LINE\n"
        ":59:BENEFICIARY\n"
        "ADDRESS LINE\n"
        ":71A:OUR"
    ),
    MessageKind.INVALID: (
        "Generate an INVALID SWIFT MT103 message. Miss the mandatory tags :23B: "
        "and :71A:. Output ONLY the message content, no markdown."
    ),
    MessageKind.SANCTIONED: (
        "Generate a structurally valid SWIFT MT103 message with tags :20:, :23B:, "
        ":32A:, :50K:, :59: and :71A: where the beneficiary (:59:) address is in "
        "Tehran, Iran. Output ONLY the message content, no markdown."
    ),
}

MARKDOWN_FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_-]*")


def strip_markdown(text: str) -> str:
    """Remove markdown code fences from a model response."""
    return MARKDOWN_FENCE_PATTERN.sub("", text or "").strip()


class LLMMessageGenerator(MessageGenerator):
    """MT103 generator backed by an OpenAI-compatible chat completion API."""

    def __init__(
        self,
        config: GeneratorConfig,
        client: Optional[Any] = None,
        fallback: Optional[MessageGenerator] = None,
    ):
        self.config = config
        self.provider = GeneratorProvider(config.provider)
        if self.provider == GeneratorProvider.TEMPLATE:
            raise GeneratorException(
                "LLM generator requires an LLM provider", provider=self.provider.value
            )

        defaults = PROVIDER_DEFAULTS[self.provider]
        self.model = config.model or defaults["model"]
        self.base_url = config.base_url or defaults["base_url"]
        self.fallback = fallback or TemplateMessageGenerator()

        self.client = client
        if self.client is None and config.api_key:
            self.client = openai.OpenAI(
                api_key=config.api_key,
                base_url=self.base_url,
                timeout=config.timeout,
            )

        if self.client is None:
            logger.warning(
                f"No API key configured for {self.provider.value}; "
                f"using {self.fallback.name} messages"
            )

    @property
    def name(self) -> str:
        return self.provider.value

    def generate(self, kind: MessageKind = MessageKind.VALID) -> str:
        kind = MessageKind(kind)

        if self.client is None:
            GENERATOR_REQUESTS.labels(
                provider=self.name, kind=kind.value, status="fallback"
            ).inc()
            return self.fallback.generate(kind)

        try:
            text = self._complete(PROMPTS[kind])
        except (openai.OpenAIError, GeneratorException) as e:
            logger.error(f"Error generating {kind.value} message with {self.name}: {e}")
            GENERATOR_REQUESTS.labels(
                provider=self.name, kind=kind.value, status="fallback"
            ).inc()
            return self.fallback.generate(kind)

        GENERATOR_REQUESTS.labels(provider=self.name, kind=kind.value, status="success").inc()
        return text

    def _complete(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )

        if not response.choices:
            raise GeneratorException("Provider returned no choices", provider=self.name)

        text = strip_markdown(response.choices[0].message.content or "")
        if not text:
            raise GeneratorException("Provider returned an empty message", provider=self.name)
        return text
