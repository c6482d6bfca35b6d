"""
Single-turn async completions through litellm.

zenspace only ever sends one prompt and reads one reply, so this client is
a thin wrapper: it resolves which model to call, fills in the request
options, and hands back text. It never retries or falls back to another
model; whoever calls it decides what a failure means.
"""

from time import monotonic
from typing import Any

from loguru import logger

from .config import DEFAULT_PROVIDER, get_default_model, get_model_max_tokens, infer_provider
from .utils import safe_get_content


def _as_float(value: Any) -> float | None:
    # env overrides arrive as strings
    if value is None or value == "":
        return None
    return float(value)


def _resolve_model(model: str | None, provider: str | None) -> tuple[str, str]:
    """Pick ``(model, provider)`` from whichever of the two was configured."""
    if model:
        return model, provider or infer_provider(model)
    provider = provider or DEFAULT_PROVIDER
    return get_default_model(provider), provider


class LLMClient:
    """
    Async completion client for one model.

    ``model`` takes a litellm model string (``"gemini/gemini-3-flash-preview"``,
    ``"gpt-4o-mini"``, ``"anthropic/claude-haiku-4-5"``, ``"ollama/llama3.2"``).
    Give ``provider`` alone to use that provider's default model.
    """

    def __init__(
        self,
        model: str | None = None,
        provider: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: int = 60,
    ):
        self.model, self.provider = _resolve_model(model, provider)
        self.temperature = temperature
        self.timeout = timeout

        ceiling = get_model_max_tokens(self.model, self.provider)
        if max_tokens and max_tokens > ceiling:
            logger.warning(f"max_tokens={max_tokens} is above the {ceiling} limit for {self.model}; using {ceiling}")
        self.max_tokens = min(max_tokens or ceiling, ceiling)
        logger.debug(f"LLMClient ready: {self.provider}/{self.model} max_tokens={self.max_tokens}")

    @classmethod
    def from_config(cls, config) -> "LLMClient":
        """Build a client from the ``llm`` section of a :class:`Config`."""
        return cls(
            model=config.get("llm.model") or None,
            provider=config.get("llm.provider") or None,
            temperature=_as_float(config.get("llm.temperature")),
            timeout=int(config.get("llm.timeout", 60)),
        )

    async def acompletion(
        self,
        messages: list[dict[str, Any]],
        *,
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> Any:
        """Send ``messages`` once and return litellm's response object.

        Args:
            messages: Chat messages, system first if present.
            temperature: Overrides the client temperature for this call.
            response_format: Structured-output request passed to litellm as is.

        Raises:
            ImportError: litellm is not installed.
            Exception: Anything litellm raises (auth, rate limit, timeout).
        """
        try:
            import litellm
        except ImportError:
            raise ImportError("Install LLM support with: pip install litellm")

        request = self.request_options(messages, temperature=temperature, response_format=response_format)
        started = monotonic()
        response = await litellm.acompletion(**request)
        logger.debug(f"{self.model} answered in {monotonic() - started:.2f}s")
        return response

    async def agenerate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> str:
        """Send one user prompt (plus optional system text) and return the reply text.

        An empty or missing reply comes back as ``""``.
        """
        messages = [{"role": "system", "content": system}] if system and system.strip() else []
        messages.append({"role": "user", "content": prompt})
        response = await self.acompletion(messages, temperature=temperature, response_format=response_format)
        return safe_get_content(response)

    def request_options(
        self,
        messages: list[dict[str, Any]],
        *,
        temperature: float | None = None,
        response_format: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Keyword arguments for ``litellm.acompletion``. Retries are always off."""
        options: dict[str, Any] = dict(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
            num_retries=0,
        )
        if temperature is None:
            temperature = self.temperature
        if temperature is not None:
            options["temperature"] = temperature
        if response_format:
            options["response_format"] = response_format
        return options

    def get_config_info(self) -> dict:
        return dict(
            provider=self.provider,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout=self.timeout,
        )
