"""
Provider table for augmentation calls.

Each provider row names the litellm model used when only the provider is
configured, the env var litellm reads its key from, and the output-token
ceiling assumed for models the limit table does not know.
"""

LOCAL_MODEL = "ollama/llama3.2"
GOOGLE_MODEL = "gemini/gemini-3-flash-preview"
OPENAI_MODEL = "gpt-4o-mini"
ANTHROPIC_MODEL = "anthropic/claude-haiku-4-5"

# provider -> (default model, API key env var, fallback output limit)
PROVIDERS: dict[str, tuple[str, str | None, int]] = {
    "gemini": (GOOGLE_MODEL, "GEMINI_API_KEY", 8_192),
    "openai": (OPENAI_MODEL, "OPENAI_API_KEY", 4_096),
    "anthropic": (ANTHROPIC_MODEL, "ANTHROPIC_API_KEY", 4_096),
    "local": (LOCAL_MODEL, None, 8_192),
}

DEFAULT_PROVIDER = "gemini"

PROVIDER_ENV_MAP: dict[str, str] = {name: env for name, (_, env, _) in PROVIDERS.items() if env}

# Summaries and title suggestions are short, so these only cap runaway replies.
# Matched by substring: "gpt-4o" covers "gpt-4o-mini".
MODEL_OUTPUT_TOKEN_LIMITS: dict[str, int] = {
    "gpt-4o": 16_384,
    "gpt-5": 16_384,
    "claude-haiku-4": 8_192,
    "claude-sonnet-4": 8_192,
    "gemini-3": 65_536,
    "gemini-2.5": 65_536,
}

_MODEL_PREFIXES = {
    "gemini/": "gemini",
    "anthropic/": "anthropic",
    "openai/": "openai",
    "ollama/": "local",
    "ollama_chat/": "local",
}


def get_default_model(provider: str) -> str:
    """Model used when the config names a provider but no model."""
    row = PROVIDERS.get(provider) or PROVIDERS[DEFAULT_PROVIDER]
    return row[0]


def get_model_max_tokens(model_name: str, provider: str | None = None) -> int:
    """Output-token ceiling for a model, falling back to the provider's default."""
    for key, limit in MODEL_OUTPUT_TOKEN_LIMITS.items():
        if key in model_name:
            return limit
    if provider in PROVIDERS:
        return PROVIDERS[provider][2]
    return 4_096


def infer_provider(model_name: str) -> str:
    """Guess the provider from a litellm model string like ``"gemini/..."``."""
    for prefix, provider in _MODEL_PREFIXES.items():
        if model_name.startswith(prefix):
            return provider
    if "claude" in model_name:
        return "anthropic"
    if "gemini" in model_name:
        return "gemini"
    return "openai"
