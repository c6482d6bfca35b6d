"""
LLM client and utilities, powered by LiteLLM.
"""

from .client import LLMClient
from .config import (
    MODEL_OUTPUT_TOKEN_LIMITS,
    PROVIDER_ENV_MAP,
    PROVIDERS,
    get_default_model,
    get_model_max_tokens,
    infer_provider,
)
from .utils import extract_text_from_response, safe_get_content, strip_code_fences

__all__ = [
    "MODEL_OUTPUT_TOKEN_LIMITS",
    "PROVIDER_ENV_MAP",
    "PROVIDERS",
    "LLMClient",
    "extract_text_from_response",
    "get_default_model",
    "get_model_max_tokens",
    "infer_provider",
    "safe_get_content",
    "strip_code_fences",
]
