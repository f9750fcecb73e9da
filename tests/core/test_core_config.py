"""
Tests for core.config — report settings.
"""

import pytest

from core.config.rules import DEFAULT_PAGE_SIZES, ReportConfig


# ── ReportConfig Tests ───────────────────────────────────────

class TestReportConfig:
    def test_defaults(self):
        config = ReportConfig()
        assert config.company_name == "Ultra Water Technologies"
        assert config.currency_label == "Rs"
        assert config.default_page_size == 25
        assert config.page_sizes == DEFAULT_PAGE_SIZES
        assert config.unknown_customer == "Unknown Customer"
        assert config.unknown_supplier == "Unknown Supplier"

    def test_default_page_size_must_be_allowed(self):
        with pytest.raises(ValueError, match="default_page_size"):
            ReportConfig(default_page_size=30)

    def test_page_sizes_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            ReportConfig(page_sizes=(0, 25), default_page_size=25)

    def test_page_sizes_must_be_non_empty(self):
        with pytest.raises(ValueError, match="non-empty"):
            ReportConfig(page_sizes=())

    def test_negative_cache_size_rejected(self):
        with pytest.raises(ValueError, match="merge_cache_size"):
            ReportConfig(merge_cache_size=-1)

    def test_blank_placeholder_rejected(self):
        with pytest.raises(ValueError, match="unknown_customer"):
            ReportConfig(unknown_customer="")

    def test_validate_page_size(self):
        config = ReportConfig()
        assert config.validate_page_size(50) == 50
        with pytest.raises(ValueError, match="page_size"):
            config.validate_page_size(7)


class TestFromMapping:
    def test_empty_mapping_gives_defaults(self):
        assert ReportConfig.from_mapping(None) == ReportConfig()
        assert ReportConfig.from_mapping({}) == ReportConfig()

    def test_lists_become_tuples(self):
        config = ReportConfig.from_mapping({"page_sizes": [5, 10], "default_page_size": 5})
        assert config.page_sizes == (5, 10)
        assert config.default_page_size == 5

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError, match="Unknown report settings: colour"):
            ReportConfig.from_mapping({"colour": "blue"})

