"""
llm_utils.py - LLM provider management for the article assistant

The assistant's semantic work (search ranking, quiz generation, content
adaptation, chat) is delegated to an external chat model. This module hides
the provider differences between DeepSeek, OpenAI-compatible endpoints and
a local Ollama server behind one ``invoke`` call.
"""

import logging
import os
import re
from typing import List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_deepseek import ChatDeepSeek
from langchain_deepseek.chat_models import DEFAULT_API_BASE as DEEPSEEK_DEFAULT_API_BASE
from langchain_ollama import OllamaLLM
from langchain_openai import ChatOpenAI

_LOG = logging.getLogger(__name__)

DEFAULT_LLM_PROVIDER = "deepseek"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen3:8b"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL)


class LLMProvider:
    """LLM provider configuration and management."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        provider: str = DEFAULT_LLM_PROVIDER,
        model: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
        timeout: int = 60,
        max_retries: int = 2,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.provider = provider.lower()
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries
        self._llm = None

        self._configure_provider()

    @classmethod
    def from_config(cls, llm_config) -> "LLMProvider":
        """Build a provider from an ``LLMConfig`` section."""
        return cls(
            api_key=llm_config.api_key or None,
            base_url=llm_config.base_url or None,
            provider=llm_config.provider,
            model=llm_config.model or None,
            temperature=llm_config.temperature,
            max_tokens=llm_config.max_tokens,
        )

    def _configure_provider(self):
        """Fill provider-specific defaults from the environment."""
        if self.provider == "ollama":
            self.base_url = self.base_url or os.getenv("OLLAMA_BASE_URL", DEFAULT_OLLAMA_BASE_URL)
            self.model = self.model or os.getenv("OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL)
        elif self.provider == "openai":
            self.api_key = self.api_key or os.getenv("OPENAI_API_KEY")
            self.base_url = self.base_url or os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1")
            self.model = self.model or os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
        elif self.provider == "deepseek":
            self.api_key = self.api_key or os.getenv("DEEPSEEK_API_KEY")
            self.model = self.model or DEFAULT_DEEPSEEK_MODEL
        else:
            raise ValueError(f"Unsupported LLM provider: {self.provider}")

    def get_llm(self):
        """Get (and memoize) the configured LLM client."""
        if self._llm is not None:
            return self._llm

        if self.provider == "ollama":
            _LOG.debug("Using Ollama provider: %s at %s", self.model, self.base_url)
            self._llm = OllamaLLM(
                model=self.model,
                base_url=self.base_url,
                temperature=self.temperature,
            )
        elif self.provider == "openai":
            if not self.api_key:
                raise ValueError(
                    "OpenAI API key required. Set OPENAI_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using OpenAI-compatible provider: %s at %s", self.model, self.base_url)
            self._llm = ChatOpenAI(
                model=self.model,
                api_key=self.api_key,
                base_url=self.base_url,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        else:
            if not self.api_key:
                raise ValueError(
                    "DeepSeek API key required. Set DEEPSEEK_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using DeepSeek provider: %s", self.model)
            self._llm = ChatDeepSeek(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
                max_retries=self.max_retries,
                api_key=self.api_key,
                api_base=self.base_url or DEEPSEEK_DEFAULT_API_BASE,
            )
        return self._llm

    def invoke(self, messages: List[BaseMessage]) -> AIMessage:
        """Invoke the model and always return an ``AIMessage``."""
        llm = self.get_llm()

        if self.provider == "ollama":
            # OllamaLLM is a completion model: flatten the conversation.
            prompt = "\n\n".join(_render_turn(m) for m in messages)
            return AIMessage(content=clean_think_blocks(llm.invoke(prompt)))

        return llm.invoke(messages)

    def complete(self, prompt: str, system: Optional[str] = None) -> str:
        """Single-turn helper returning the reply text."""
        messages: List[BaseMessage] = []
        if system:
            messages.append(SystemMessage(content=system))
        messages.append(HumanMessage(content=prompt))
        return str(self.invoke(messages).content).strip()


def _render_turn(message: BaseMessage) -> str:
    if isinstance(message, SystemMessage):
        return f"System: {message.content}"
    if isinstance(message, HumanMessage):
        return f"User: {message.content}"
    return f"Assistant: {message.content}"


def clean_think_blocks(content: str) -> str:
    """Remove <think> reasoning blocks some local models emit."""
    return _THINK_BLOCK.sub("", content).strip()

