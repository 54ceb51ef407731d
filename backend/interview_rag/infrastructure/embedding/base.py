"""Embedding provider interface."""

from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """Turns texts into fixed-dimension vectors.

    Implementations return exactly one vector per input text, in input order.
    Errors are raised as the backend raises them; callers decide how to wrap.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        pass

    @property
    @abstractmethod
    def embedding_dimension(self) -> int:
        pass

    @abstractmethod
    async def embed(self, texts: List[str]) -> List[List[float]]:
        """Embed a batch of texts.

        Args:
            texts: Texts to embed

        Returns:
            One vector per text, in the same order
        """
        pass
