"""
Shared fixtures: the bundled catalog and a scripted LLM provider.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from catalog_service.assistant import ArticleAssistant
from catalog_service.catalog import CatalogProvider
from catalog_service.llm_utils import LLMProvider

PROJECT_ROOT = Path(__file__).parent.parent
CATALOG_FILE = PROJECT_ROOT / "catalog_service" / "data" / "articles.json"
PROMPTS_DIR = PROJECT_ROOT / "catalog_service" / "prompts"


@pytest.fixture
def catalog():
    return CatalogProvider(CATALOG_FILE)


@pytest.fixture
def fake_llm():
    """An LLMProvider stand-in whose replies are set per test."""
    return MagicMock(spec=LLMProvider)


@pytest.fixture
def assistant(fake_llm):
    return ArticleAssistant(fake_llm, PROMPTS_DIR)
