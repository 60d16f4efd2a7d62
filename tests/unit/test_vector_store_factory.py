"""
Test suite for vector index selection.

System role: Verification of backend configuration
"""

from unittest.mock import MagicMock

import pytest

from orchestrator.boundary.vdb import (
    FAISSVectorIndex,
    InMemoryVectorIndex,
    VectorIndex,
    get_vector_index,
)
from orchestrator.configs.vector_store import VectorStoreSettings


@pytest.mark.parametrize(
    ("store_type", "expected"),
    [("memory", InMemoryVectorIndex), ("FAISS", FAISSVectorIndex)],
)
def test_get_vector_index_should_select_backend(store_type: str, expected: type) -> None:
    index = get_vector_index(VectorStoreSettings(store_type=store_type), MagicMock())

    assert isinstance(index, expected)
    assert isinstance(index, VectorIndex)


def test_get_vector_index_should_reject_unknown_type() -> None:
    with pytest.raises(ValueError):
        get_vector_index(VectorStoreSettings(store_type="s3"), MagicMock())
