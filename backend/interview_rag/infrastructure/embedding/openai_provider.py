"""OpenAI embeddings endpoint."""

from typing import List, Optional

from openai import AsyncOpenAI

from .base import EmbeddingProvider


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Calls the OpenAI embeddings API with ``text-embedding-3-small`` by default.

    The client is created on first use, so constructing the provider never
    needs network access or a valid key.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = "text-embedding-3-small",
        dimension: int = 1536,
        client: Optional[AsyncOpenAI] = None,
    ):
        self._api_key = api_key
        self._model_name = model_name
        self._dimension = dimension
        self._client = client

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def embedding_dimension(self) -> int:
        return self._dimension

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def embed(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []

        response = await self._get_client().embeddings.create(model=self._model_name, input=texts)

        # The API tags each vector with the index of its input.
        ordered = sorted(response.data, key=lambda item: item.index)
        return [list(item.embedding) for item in ordered]
