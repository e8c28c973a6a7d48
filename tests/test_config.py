"""Unit tests for pdf_harvester.utils.config."""

import pytest

from pdf_harvester.utils.config import HarvestConfig


def test_defaults():
    config = HarvestConfig()

    assert config.listing_url == "https://www.duragloss.com/sds-sheets/"
    assert config.snapshot_path == "duragloss.html"
    assert config.ledger_path == "pdf_links.txt"
    assert config.output_dir == "PDFs"
    assert config.extension == ".pdf"
    assert config.media_type == "application/pdf"
    assert config.timeout == 30
    assert config.render_timeout == 300
    assert config.dir_mode == 0o755
    assert config.validate() is config


def test_origin_drops_path():
    config = HarvestConfig(base_url="https://example.test/some/path/")
    assert config.origin == "https://example.test"


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_url": "www.duragloss.com"},
        {"listing_url": "/sds-sheets/"},
        {"timeout": 0},
        {"render_timeout": -1},
        {"extension": ""},
        {"media_type": ""},
        {"output_dir": ""},
    ],
)
def test_invalid_settings_raise(overrides):
    with pytest.raises(ValueError):
        HarvestConfig(**overrides).validate()
