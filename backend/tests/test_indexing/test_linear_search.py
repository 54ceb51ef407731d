"""Tests for cosine similarity and the LinearSearchIndex."""

import math
from typing import List

import numpy as np
import pytest

from interview_rag.infrastructure.indexing.base import ChunkVector, IndexType
from interview_rag.infrastructure.indexing.linear_search import LinearSearchIndex, cosine_similarity
from interview_rag.modules.common.exceptions import DimensionMismatchError


def make_vector(chunk_id: str, embedding: List[float], chunk_index: int = 0) -> ChunkVector:
    return ChunkVector(
        chunk_id=chunk_id,
        source="doc-1",
        content=f"content of {chunk_id}",
        chunk_index=chunk_index,
        embedding=embedding,
    )


class TestCosineSimilarity:
    """Test suite for cosine_similarity."""

    def test_identical_vectors(self):
        assert cosine_similarity([0.3, 0.4, 0.5], [0.3, 0.4, 0.5]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_opposite_vectors_are_negative(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_zero_vector_is_zero(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0])

        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_symmetry_and_bounds_on_random_vectors(self):
        rng = np.random.default_rng(seed=42)

        for _ in range(50):
            a = rng.normal(size=16).tolist()
            b = rng.normal(size=16).tolist()

            forward = cosine_similarity(a, b)
            assert forward == pytest.approx(cosine_similarity(b, a))
            assert -1.0 <= forward <= 1.0
            assert cosine_similarity(a, a) == pytest.approx(1.0)

    def test_matches_numpy(self):
        a = [0.2, -0.7, 1.5, 3.0]
        b = [1.1, 0.4, -0.3, 2.2]

        expected = float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))
        assert cosine_similarity(a, b) == pytest.approx(expected)

    def test_parallel_vectors_never_exceed_one(self):
        a = [0.1] * 1536
        assert cosine_similarity(a, [value * 3 for value in a]) <= 1.0

    def test_never_nan(self):
        assert not math.isnan(cosine_similarity([1e-300, 0.0], [1e-300, 0.0]))

    @pytest.mark.parametrize(
        "vec1, vec2",
        [
            ([math.nan, 0.0, 0.0], [0.0, 1.0, 0.0]),
            ([math.inf, 0.0, 0.0], [1.0, 0.0, 0.0]),
            ([1e200, 1e200], [1e200, 1e200]),
        ],
    )
    def test_non_finite_score_is_zero(self, vec1, vec2):
        assert cosine_similarity(vec1, vec2) == 0.0


class TestLinearSearchIndex:
    """Test suite for LinearSearchIndex."""

    @pytest.fixture
    def index(self) -> LinearSearchIndex:
        return LinearSearchIndex(dimension=3)

    def test_index_properties(self, index: LinearSearchIndex):
        assert index.index_type == IndexType.LINEAR_SEARCH
        assert index.dimension == 3
        assert len(index) == 0

    @pytest.mark.asyncio
    async def test_ranking_positive_zero_negative(self, index: LinearSearchIndex):
        await index.add_vectors(
            [
                make_vector("orthogonal", [0.0, 1.0, 0.0]),
                make_vector("opposite", [-1.0, 0.0, 0.0]),
                make_vector("same", [1.0, 0.0, 0.0]),
            ]
        )

        results = await index.search([1.0, 0.0, 0.0], k=5)

        assert [result.chunk_id for result in results] == ["same", "orthogonal", "opposite"]
        assert [result.similarity_score for result in results] == pytest.approx([1.0, 0.0, -1.0])

    @pytest.mark.asyncio
    async def test_limits_to_k(self, index: LinearSearchIndex):
        await index.add_vectors([make_vector(f"c{i}", [1.0, float(i), 0.0]) for i in range(10)])

        results = await index.search([1.0, 0.0, 0.0], k=3)

        assert [result.chunk_id for result in results] == ["c0", "c1", "c2"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("k", [0, -1])
    async def test_non_positive_k_returns_nothing(self, index: LinearSearchIndex, k: int):
        await index.add_vector(make_vector("c1", [1.0, 0.0, 0.0]))

        assert await index.search([1.0, 0.0, 0.0], k=k) == []

    @pytest.mark.asyncio
    async def test_empty_index(self, index: LinearSearchIndex):
        assert await index.search([1.0, 0.0, 0.0], k=5) == []

    @pytest.mark.asyncio
    async def test_ties_keep_insertion_order(self, index: LinearSearchIndex):
        await index.add_vectors(
            [
                make_vector("first", [0.0, 2.0, 0.0]),
                make_vector("second", [0.0, 1.0, 0.0]),
                make_vector("third", [0.0, 5.0, 0.0]),
            ]
        )

        results = await index.search([0.0, 1.0, 0.0], k=3)

        assert [result.chunk_id for result in results] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_repeated_searches_are_identical(self, index: LinearSearchIndex):
        rng = np.random.default_rng(seed=7)
        await index.add_vectors([make_vector(f"c{i}", rng.normal(size=3).tolist(), i) for i in range(30)])
        query = [0.5, -0.2, 0.9]

        first = await index.search(query, k=10)
        second = await index.search(query, k=10)

        assert [result.chunk_id for result in first] == [result.chunk_id for result in second]

    @pytest.mark.asyncio
    async def test_add_rejects_wrong_dimension(self, index: LinearSearchIndex):
        with pytest.raises(DimensionMismatchError):
            await index.add_vectors([make_vector("ok", [1.0, 0.0, 0.0]), make_vector("bad", [1.0, 0.0])])

        assert len(index) == 0

    @pytest.mark.asyncio
    async def test_query_with_wrong_dimension(self, index: LinearSearchIndex):
        await index.add_vector(make_vector("c1", [1.0, 0.0, 0.0]))

        with pytest.raises(DimensionMismatchError):
            await index.search([1.0, 0.0], k=1)

    @pytest.mark.asyncio
    async def test_result_carries_chunk_fields(self, index: LinearSearchIndex):
        vector = make_vector("c1", [1.0, 1.0, 0.0], chunk_index=4)
        vector.page = 2
        vector.section = "Methods"
        await index.add_vector(vector)

        [result] = await index.search([1.0, 1.0, 0.0], k=1)

        assert result.source == "doc-1"
        assert result.content == "content of c1"
        assert result.chunk_index == 4
        assert result.page == 2
        assert result.section == "Methods"

    @pytest.mark.asyncio
    async def test_clear(self, index: LinearSearchIndex):
        await index.add_vector(make_vector("c1", [1.0, 0.0, 0.0]))
        await index.clear()

        assert len(index) == 0
