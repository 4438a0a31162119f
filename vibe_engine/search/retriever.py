# AI INSTRUCTION:
# Hybrid retriever used to ground researcher answers:
#  - Lexical search via SQLite FTS5 + BM25 scoring (always)
#  - Vector search via FAISS with ids.npy row→doc mapping (when an index and
#    an embedder are configured)
# Embedding failures degrade to lexical-only results.

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import Callable, List, Optional

import faiss
import numpy as np
import requests

from .types import ContextChunk
from .rank import merge_and_rank

logger = logging.getLogger(__name__)

_FTS_WORD = re.compile(r"[0-9A-Za-z_]+")


def fts5_safe_query(raw: str, joiner: str = "OR") -> str:
    """
    Convert arbitrary user text to a safe FTS5 MATCH expression.
    Tokens are quoted so '-' or ':' never parse as operators.
    """
    terms = _FTS_WORD.findall(raw)
    if not terms:
        return '""'  # empty phrase → matches nothing
    return f" {joiner} ".join(f'"{t}"' for t in terms)


class OllamaEmbedder:
    """Embed a query with Ollama /api/embeddings, L2-normalized for IP search."""

    def __init__(self, host: str = "http://localhost:11434", model: str = "bge-m3:latest", timeout: int = 30):
        self.host = host.rstrip("/")
        self.model = model
        self.timeout = timeout

    def __call__(self, text: str) -> np.ndarray:
        resp = requests.post(
            f"{self.host}/api/embeddings",
            json={"model": self.model, "prompt": text},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        vec = np.array(resp.json()["embedding"], dtype="float32")
        faiss.normalize_L2(vec.reshape(1, -1))
        return vec


class Retriever:
    def __init__(
        self,
        db_path: str,
        faiss_path: Optional[str] = None,
        top_k: int = 6,
        embedder: Optional[Callable[[str], np.ndarray]] = None,
    ):
        self.db_path = db_path
        self.faiss_path = faiss_path
        self.top_k = top_k
        self.embedder = embedder

        self._faiss_index: Optional[faiss.Index] = None
        self._faiss_ids: Optional[list[str]] = None  # FAISS row -> documents.id

    # -------------------------
    # Loaders
    # -------------------------
    def _connect(self) -> sqlite3.Connection:
        # one connection per call; requests may run on different threads
        # read-only: a wrong path must not leave an empty database behind
        return sqlite3.connect(f"file:{self.db_path}?mode=ro", uri=True)

    def _load_faiss_index(self) -> faiss.Index:
        if self._faiss_index is None:
            self._faiss_index = faiss.read_index(self.faiss_path)
        return self._faiss_index

    def _load_faiss_ids(self) -> Optional[list[str]]:
        """Load sidecar ids.npy that maps FAISS row to documents.id."""
        if self._faiss_ids is None:
            ids_path = Path(self.faiss_path).with_name("ids.npy")
            if ids_path.exists():
                self._faiss_ids = np.load(ids_path.as_posix()).astype(str).tolist()
        return self._faiss_ids

    # -------------------------
    # Searches
    # -------------------------
    def _lexical(self, conn: sqlite3.Connection, query: str) -> List[ContextChunk]:
        sql = """
        SELECT id, text, source, bm25(documents) AS rank
        FROM documents
        WHERE documents MATCH ?
        ORDER BY rank
        LIMIT ?;
        """
        rows = conn.execute(sql, (fts5_safe_query(query), self.top_k * 3)).fetchall()
        results: List[ContextChunk] = []
        for (doc_id, text, source, rank) in rows:
            # bm25() is lower-is-better and usually negative
            results.append(
                ContextChunk(
                    id=f"lex-{doc_id}",
                    text=text,
                    source=source,
                    score=-float(rank),
                    meta={"doc_id": str(doc_id), "bm25": float(rank)},
                )
            )
        return results

    def _vector(self, conn: sqlite3.Connection, query: str) -> List[ContextChunk]:
        if not (self.faiss_path and self.embedder):
            return []
        index = self._load_faiss_index()
        ids = self._load_faiss_ids()
        try:
            qvec = self.embedder(query)
            if qvec.shape[0] != index.d:
                raise ValueError(f"Query dim {qvec.shape[0]} != index dim {index.d}")
        except (requests.RequestException, ValueError, KeyError) as e:
            logger.warning("Query embedding unavailable, using lexical results only: %s", e)
            return []

        D, I = index.search(np.array([qvec], dtype="float32"), self.top_k * 3)

        results: List[ContextChunk] = []
        for sim, row_idx in zip(D[0], I[0]):
            row_idx = int(row_idx)
            if row_idx < 0 or not ids or row_idx >= len(ids):
                continue
            doc_id = ids[row_idx]
            row = conn.execute(
                "SELECT text, source FROM documents WHERE id = ? LIMIT 1;", (doc_id,)
            ).fetchone()
            if row is None:
                continue
            results.append(
                ContextChunk(
                    id=f"vec-{doc_id}",
                    text=row[0],
                    source=row[1],
                    score=float(sim),
                    meta={"doc_id": str(doc_id), "faiss_idx": row_idx},
                )
            )
        return results

    # -------------------------
    # Public API
    # -------------------------
    def retrieve(self, query: str, alpha: float = 0.5) -> List[ContextChunk]:
        conn = self._connect()
        try:
            lex_results = self._lexical(conn, query)
            vec_results = self._vector(conn, query)
        finally:
            conn.close()
        logger.debug("retrieve: %d lexical, %d vector hits", len(lex_results), len(vec_results))
        return merge_and_rank(lex_results, vec_results, alpha=alpha, top_k=self.top_k)
