"""Shared test fixtures for vylobot."""

import shutil
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

SAMPLE_DATA = Path(__file__).parent.parent / "data"


@pytest.fixture
def data_dir(tmp_path):
    """Copy of the sample data directory (products, faq, sop, promo)."""
    target = tmp_path / "data"
    shutil.copytree(SAMPLE_DATA, target)
    return target


@pytest.fixture
def store(tmp_path):
    from storage import JsonStore

    return JsonStore(tmp_path / "store")


@pytest.fixture
def catalog_store(data_dir):
    from catalog import CatalogStore
    from variants import FirstVariant

    return CatalogStore(data_dir / "products", FirstVariant())


@pytest.fixture
def bot_config(data_dir):
    from cli.config_models import BotConfig

    return BotConfig.from_dict(
        {
            "paths": {"data_dir": str(data_dir)},
            "owner": {"owner_ids": ["6281100000111"], "moderator_ids": ["6281100000333"]},
            "variant_seed": 7,
        }
    )


@pytest.fixture
def components(bot_config):
    """Full message-handling graph over the sample data, no generative fallback."""
    from cli.utils import get_components

    return get_components(config_model=bot_config, with_llm=False)


@pytest.fixture
def mock_provider():
    """LLMProvider stand-in returning a fixed answer."""
    provider = MagicMock()
    provider.provider_name = "gemini"
    provider.generate.return_value = "Bisa Kak, silakan chat admin untuk detailnya ya 😊"
    return provider
