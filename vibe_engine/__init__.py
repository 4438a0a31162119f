# Vibe engine: model-backed flows behind a small, typed orchestration layer.

__version__ = "0.3.0"
