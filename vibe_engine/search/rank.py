# Merge lexical and vector hits into one ranked list.
# Stateless; inputs are not modified.

from __future__ import annotations
from dataclasses import replace
from typing import Dict, List
from .types import ContextChunk


def _normalized(results: List[ContextChunk]) -> List[ContextChunk]:
    if not results:
        return []
    scores = [r.score for r in results]
    lo, hi = min(scores), max(scores)
    rng = hi - lo if hi != lo else 1.0
    return [replace(r, score=(r.score - lo) / rng) for r in results]


def merge_and_rank(
    lex_results: List[ContextChunk],
    vec_results: List[ContextChunk],
    alpha: float = 0.5,
    top_k: int = 6,
) -> List[ContextChunk]:
    """Blend by document key; a hit found by both searches gets alpha*lex + (1-alpha)*vec."""
    combined: Dict[str, ContextChunk] = {}
    for r in _normalized(lex_results):
        combined[_doc_key(r)] = r

    for v in _normalized(vec_results):
        key = _doc_key(v)
        if key in combined:
            lex = combined[key]
            combined[key] = replace(lex, score=(alpha * lex.score) + ((1 - alpha) * v.score))
        else:
            combined[key] = v

    ranked = sorted(combined.values(), key=lambda x: x.score, reverse=True)
    return ranked[:top_k]


def _doc_key(chunk: ContextChunk) -> str:
    return str((chunk.meta or {}).get("doc_id", chunk.id))
