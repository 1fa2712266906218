# file: backend/vector_search.py

"""Embedding storage and similarity search over past air-quality readings."""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from langchain_openai import OpenAIEmbeddings
from pinecone import Pinecone

from backend import config
from backend.models import PollutantLevels, VectorMetadata, VectorSearchResult

POLLUTANT_PREFIX = "pollutant_"
SIMILAR_PATTERNS_TOP_K = 5


def flatten_metadata(metadata: VectorMetadata) -> Dict[str, Any]:
    """Pinecone metadata values must be scalars, so pollutants become prefixed keys."""
    flat: Dict[str, Any] = {"location": metadata.location, "timestamp": metadata.timestamp, "aqi": metadata.aqi}
    for name, value in metadata.pollutants.model_dump().items():
        if value is not None:
            flat[f"{POLLUTANT_PREFIX}{name}"] = value
    return flat


def unflatten_metadata(flat: Dict[str, Any]) -> VectorMetadata:
    pollutants = {key[len(POLLUTANT_PREFIX):]: value for key, value in flat.items()
                  if key.startswith(POLLUTANT_PREFIX)}
    return VectorMetadata(
        location=flat.get("location", ""),
        timestamp=flat.get("timestamp", ""),
        aqi=int(flat.get("aqi", 0)),
        pollutants=PollutantLevels(**pollutants),
    )


def describe_reading(location: str, metadata: VectorMetadata) -> str:
    return f"Air quality in {location}: AQI {metadata.aqi}, PM2.5 {metadata.pollutants.pm25}"


class VectorSearchService:
    def __init__(self, api_key: Optional[str] = None, openai_api_key: Optional[str] = None,
                 index_name: str = config.PINECONE_INDEX):
        self.api_key = api_key
        self.openai_api_key = openai_api_key
        self.index_name = index_name
        self._index = None
        self._embeddings: Optional[OpenAIEmbeddings] = None

    async def initialize(self) -> bool:
        """Connect lazily; returns False when credentials are missing."""
        if not self.api_key or not self.openai_api_key:
            logging.warning("Pinecone or OpenAI credentials not configured")
            return False
        if self._index is None:
            self._index = Pinecone(api_key=self.api_key).Index(self.index_name)
            self._embeddings = OpenAIEmbeddings(model=config.EMBEDDING_MODEL, api_key=self.openai_api_key)
        return True

    async def embed(self, text: str) -> List[float]:
        return await self._embeddings.aembed_query(text)

    async def upsert(self, vector_id: str, vector: List[float], metadata: VectorMetadata) -> None:
        logging.info(f"Upserting vector {vector_id} to {self.index_name}")
        record = {"id": vector_id, "values": vector, "metadata": flatten_metadata(metadata)}
        await asyncio.to_thread(self._index.upsert, vectors=[record])

    async def query(self, vector: List[float], top_k: int = 10) -> List[VectorSearchResult]:
        logging.info(f"Searching for {top_k} similar vectors")
        response = await asyncio.to_thread(self._index.query, vector=vector, top_k=top_k, include_metadata=True)
        return [
            VectorSearchResult(id=match.id, score=match.score, metadata=unflatten_metadata(match.metadata or {}))
            for match in response.matches
        ]

    async def index_reading(self, vector_id: str, metadata: VectorMetadata) -> None:
        text = f"Air quality data for {metadata.location}: AQI {metadata.aqi}"
        await self.upsert(vector_id, await self.embed(text), metadata)

    async def find_similar_patterns(self, location: str, metadata: VectorMetadata) -> List[VectorSearchResult]:
        embedding = await self.embed(describe_reading(location, metadata))
        return await self.query(embedding, top_k=SIMILAR_PATTERNS_TOP_K)


@lru_cache(maxsize=1)
def get_vector_search() -> VectorSearchService:
    return VectorSearchService(api_key=config.PINECONE_API_KEY, openai_api_key=config.OPENAI_API_KEY)
