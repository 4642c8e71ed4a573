"""
FAISS vector index for local development and tests.

Keeps vectors in an IndexIDMap2 over an inner-product flat index. Vectors
are L2-normalized on the way in, so inner product equals cosine similarity.
Fragment metadata lives beside the index and both can be persisted to a
directory for reuse across runs.

Dependencies: faiss-cpu, numpy
System role: Local vector store for development search
"""

import asyncio
import json
import logging
import uuid
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Sequence

import faiss
import numpy as np

from blogsearch.boundary.vdb.base import VectorIndex, clamp_similarity
from blogsearch.core.exceptions import VectorStoreError
from blogsearch.models.embedding import ContentType, EmbeddingRecord, NearestMatch

logger = logging.getLogger(__name__)

INDEX_FILE = "index.faiss"
METADATA_FILE = "fragments.json"


@dataclass
class _StoredFragment:
    document_id: str
    content_type: str
    text_fragment: str
    chunk_index: int | None
    token_count: int


class FaissVectorIndex(VectorIndex):
    """
    In-process cosine index.

    Mutations are serialized by an asyncio.Lock. Queries read a consistent
    snapshot because FAISS calls never yield to the event loop.
    """

    def __init__(self, dimension: int, index_dir: str | None = None) -> None:
        """
        Initialize FAISS index, loading a persisted copy when present.

        Args:
            dimension: Vector dimension
            index_dir: Directory for persistence; in-memory only when None
        """
        self.dimension = dimension
        self._index_dir = Path(index_dir) if index_dir else None
        self._lock = asyncio.Lock()
        self._fragments: dict[int, _StoredFragment] = {}
        self._next_id = 0
        self._index = self._load_or_create_index()

    def _load_or_create_index(self) -> faiss.IndexIDMap2:
        """Load existing FAISS index or create an empty one."""
        if self._index_dir is not None:
            index_path = self._index_dir / INDEX_FILE
            metadata_path = self._index_dir / METADATA_FILE
            if index_path.exists() and metadata_path.exists():
                index = faiss.read_index(str(index_path))
                if index.d != self.dimension:
                    raise VectorStoreError(
                        "Persisted FAISS index has a different dimension",
                        operation="load",
                        details={"expected": self.dimension, "found": index.d},
                    )
                raw = json.loads(metadata_path.read_text(encoding="utf-8"))
                self._fragments = {
                    int(fid): _StoredFragment(**row) for fid, row in raw["fragments"].items()
                }
                self._next_id = raw["next_id"]
                logger.info(
                    f"{__name__}:_load_or_create_index - Loaded {index.ntotal} vectors from {self._index_dir}"
                )
                return index

        logger.info(
            f"{__name__}:_load_or_create_index - Creating new FAISS index (dimension={self.dimension})"
        )
        return faiss.IndexIDMap2(faiss.IndexFlatIP(self.dimension))

    async def _persist(self) -> None:
        """Snapshot under the caller's lock, then write the files off the event loop."""
        if self._index_dir is None:
            return
        index_bytes = faiss.serialize_index(self._index).tobytes()
        payload = {
            "next_id": self._next_id,
            "fragments": {str(fid): asdict(row) for fid, row in self._fragments.items()},
        }
        metadata = json.dumps(payload, ensure_ascii=False)
        await asyncio.to_thread(self._write_files, index_bytes, metadata)

    def _write_files(self, index_bytes: bytes, metadata: str) -> None:
        self._index_dir.mkdir(parents=True, exist_ok=True)
        (self._index_dir / INDEX_FILE).write_bytes(index_bytes)
        (self._index_dir / METADATA_FILE).write_text(metadata, encoding="utf-8")

    def _as_matrix(self, vectors: Sequence[Sequence[float]], operation: str) -> np.ndarray:
        matrix = np.asarray(vectors, dtype="float32")
        if matrix.ndim != 2 or matrix.shape[1] != self.dimension:
            raise VectorStoreError(
                "Vector dimension mismatch",
                operation=operation,
                details={"expected": self.dimension, "shape": list(matrix.shape)},
            )
        matrix = np.ascontiguousarray(matrix)
        faiss.normalize_L2(matrix)
        return matrix

    @property
    def size(self) -> int:
        """Number of stored vectors."""
        return int(self._index.ntotal)

    async def insert(self, record: EmbeddingRecord) -> str:
        fragment_ids = await self.batch_insert([record])
        return fragment_ids[0]

    async def batch_insert(self, records: Sequence[EmbeddingRecord]) -> list[str]:
        if not records:
            return []

        matrix = self._as_matrix([record.vector for record in records], "insert")

        async with self._lock:
            ids = np.arange(self._next_id, self._next_id + len(records), dtype="int64")
            try:
                self._index.add_with_ids(matrix, ids)
            except RuntimeError as e:
                raise VectorStoreError(f"FAISS insert failed: {e}", operation="insert") from e

            for fid, record in zip(ids.tolist(), records):
                self._fragments[fid] = _StoredFragment(
                    document_id=str(record.document_id),
                    content_type=record.content_type.value,
                    text_fragment=record.text_fragment,
                    chunk_index=record.chunk_index,
                    token_count=record.token_count,
                )
            self._next_id += len(records)
            await self._persist()

        logger.debug(f"{__name__}:batch_insert - Added {len(records)} vectors")
        return [str(fid) for fid in ids.tolist()]

    async def query_nearest(
        self,
        vector: Sequence[float],
        k: int,
        min_similarity: float,
    ) -> list[NearestMatch]:
        if k <= 0 or self._index.ntotal == 0:
            return []

        query = self._as_matrix([vector], "query")
        try:
            scores, ids = self._index.search(query, min(k, int(self._index.ntotal)))
        except RuntimeError as e:
            raise VectorStoreError(f"FAISS search failed: {e}", operation="query") from e

        matches: list[NearestMatch] = []
        for score, fid in zip(scores[0].tolist(), ids[0].tolist()):
            if fid == -1:
                continue
            similarity = clamp_similarity(score)
            if similarity < min_similarity:
                continue
            fragment = self._fragments[fid]
            matches.append(
                NearestMatch(
                    fragment_id=str(fid),
                    document_id=uuid.UUID(fragment.document_id),
                    similarity=similarity,
                    text_fragment=fragment.text_fragment,
                    content_type=ContentType(fragment.content_type),
                    chunk_index=fragment.chunk_index,
                )
            )
        return matches

    async def delete_by_document_id(self, document_id: uuid.UUID) -> int:
        key = str(document_id)
        async with self._lock:
            doomed = [fid for fid, row in self._fragments.items() if row.document_id == key]
            if not doomed:
                return 0
            try:
                self._index.remove_ids(np.asarray(doomed, dtype="int64"))
            except RuntimeError as e:
                raise VectorStoreError(f"FAISS delete failed: {e}", operation="delete") from e
            for fid in doomed:
                del self._fragments[fid]
            await self._persist()

        logger.info(
            "Deleted document vectors",
            extra={"document_id": key, "fragment_count": len(doomed)},
        )
        return len(doomed)

    def fragments_for(self, document_id: uuid.UUID) -> list[tuple[ContentType, int | None]]:
        """(content_type, chunk_index) of every stored fragment of a document."""
        key = str(document_id)
        return [
            (ContentType(row.content_type), row.chunk_index)
            for row in self._fragments.values()
            if row.document_id == key
        ]
