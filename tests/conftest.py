from __future__ import annotations

import os

import pytest

from snomatch.config import MAX_ANCESTORS_ENV_VAR
from snomatch.domain import GraphStore
from tests.support.graphs import build_store, hierarchy

os.environ.pop(MAX_ANCESTORS_ENV_VAR, None)


@pytest.fixture
def inferred_store() -> GraphStore:
    return build_store(*hierarchy())

