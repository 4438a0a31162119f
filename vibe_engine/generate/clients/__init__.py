# Concrete generation ports plus the factory that picks one from settings.

import logging

from .echo_dev_client import EchoDevClient
from .grounded_client import GroundedClient

logger = logging.getLogger(__name__)


def build_model_client(settings):
    """Pick a model client for MODEL_BACKEND; wrap it with grounding when search is configured."""
    backend = (settings.MODEL_BACKEND or "echo").lower()
    if backend == "ollama":
        from .ollama_client import OllamaClient
        client = OllamaClient(model=settings.OLLAMA_MODEL, host=settings.OLLAMA_HOST)
    elif backend == "openai":
        from .openai_client import OpenAIClient
        client = OpenAIClient(model=settings.OPENAI_MODEL, api_key=settings.OPENAI_API_KEY)
    elif backend == "echo":
        client = EchoDevClient()
    else:
        raise ValueError(f"Unknown MODEL_BACKEND: {settings.MODEL_BACKEND!r}")

    if settings.SEARCH_DB_PATH:
        from ...search import Retriever, OllamaEmbedder
        embedder = None
        if settings.SEARCH_FAISS_PATH:
            embedder = OllamaEmbedder(host=settings.OLLAMA_HOST, model=settings.EMBED_MODEL)
        retriever = Retriever(
            db_path=settings.SEARCH_DB_PATH,
            faiss_path=settings.SEARCH_FAISS_PATH,
            top_k=settings.SEARCH_TOP_K,
            embedder=embedder,
        )
        client = GroundedClient(client, retriever)

    logger.info("Model backend: %s (%s)", backend, getattr(client, "model", None))
    return client


__all__ = ["EchoDevClient", "GroundedClient", "build_model_client"]
