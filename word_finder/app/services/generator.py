"""Boundary to the external language model that produces word lists."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from openai import OpenAI

from word_finder.utils.observability import get_logger

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.6


class WordGenerator(Protocol):
    """Anything that turns a prompt and response schema into a payload.

    The returned payload is untrusted; callers validate it.
    """

    def generate(self, prompt: str, schema: Dict[str, Any]) -> Any:
        ...


class OpenAIWordGenerator:
    """Word generator backed by the OpenAI chat-completions API."""

    def __init__(
        self,
        *,
        client: Optional[Any] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        api_key: Optional[str] = None,
    ) -> None:
        self.model = model
        self.temperature = float(temperature)
        self._client = client if client is not None else OpenAI(api_key=api_key)
        self._logger = get_logger(__name__).bind(component="openai_generator", model=model)

    def generate(self, prompt: str, schema: Dict[str, Any]) -> Optional[str]:
        """Return the reply's message content, or ``None`` if it has none."""

        response = self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "word_list",
                    "strict": True,
                    "schema": schema,
                },
            },
        )

        choices = getattr(response, "choices", None) or []
        if not choices:
            self._logger.warning("Generation reply had no choices")
            return None

        message = choices[0].message
        refusal = getattr(message, "refusal", None)
        if refusal:
            self._logger.warning("Generation request refused", context={"refusal": refusal})
            return None
        return message.content


__all__ = ["WordGenerator", "OpenAIWordGenerator", "DEFAULT_MODEL", "DEFAULT_TEMPERATURE"]
