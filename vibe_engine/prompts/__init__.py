from .store import (
    FALLBACK_PROMPT,
    FallbackPromptStore,
    PromptStore,
    YamlPromptStore,
    default_prompt_store,
)

__all__ = ["FALLBACK_PROMPT", "FallbackPromptStore", "PromptStore", "YamlPromptStore", "default_prompt_store"]
