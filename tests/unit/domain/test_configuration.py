"""Tests for domain/configuration.py."""

import pytest

from namedclosure.domain.configuration import ExpansionConfig
from namedclosure.domain.exceptions import ConfigError


class TestExpansionConfigDefaults:
    """Tests for default values."""

    def test_default_marker(self) -> None:
        assert ExpansionConfig().markers == frozenset({"named_closure"})

    def test_default_not_strict(self) -> None:
        assert ExpansionConfig().strict is False

    def test_default_runtime(self) -> None:
        config = ExpansionConfig()
        assert config.runtime_alias == "_namedclosure"
        assert config.runtime_module == "namedclosure"


class TestExpansionConfigValidation:
    """FAIL-FIRST validation."""

    def test_empty_markers_raises(self) -> None:
        with pytest.raises(ConfigError, match="markers"):
            ExpansionConfig(markers=frozenset())

    def test_markers_must_be_frozenset(self) -> None:
        with pytest.raises(ConfigError, match="frozenset"):
            ExpansionConfig(markers=["capture"])  # type: ignore[arg-type]

    def test_invalid_marker_identifier_raises(self) -> None:
        with pytest.raises(ConfigError, match="identifier"):
            ExpansionConfig(markers=frozenset({"not-valid"}))

    def test_keyword_marker_raises(self) -> None:
        with pytest.raises(ConfigError, match="identifier"):
            ExpansionConfig(markers=frozenset({"lambda"}))

    def test_strict_must_be_bool(self) -> None:
        with pytest.raises(ConfigError, match="strict"):
            ExpansionConfig(strict="yes")  # type: ignore[arg-type]

    def test_alias_must_be_identifier(self) -> None:
        with pytest.raises(ConfigError, match="runtime_alias"):
            ExpansionConfig(runtime_alias="1rt")

    def test_alias_must_differ_from_marker(self) -> None:
        with pytest.raises(ConfigError, match="runtime_alias"):
            ExpansionConfig(markers=frozenset({"rt"}), runtime_alias="rt")

    def test_runtime_module_must_be_dotted_path(self) -> None:
        with pytest.raises(ConfigError, match="runtime_module"):
            ExpansionConfig(runtime_module="pkg..mod")

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ExpansionConfig(markers=frozenset())


class TestFromMapping:
    """Tests for ExpansionConfig.from_mapping."""

    def test_list_markers_converted(self) -> None:
        config = ExpansionConfig.from_mapping({"markers": ["capture", "named_closure"]})
        assert config.markers == frozenset({"capture", "named_closure"})

    def test_dashed_keys_accepted(self) -> None:
        config = ExpansionConfig.from_mapping({"runtime-alias": "_rt"})
        assert config.runtime_alias == "_rt"

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigError, match="unknown option"):
            ExpansionConfig.from_mapping({"verbose": True})

    def test_string_markers_rejected(self) -> None:
        with pytest.raises(ConfigError, match="list"):
            ExpansionConfig.from_mapping({"markers": "capture"})

    def test_empty_mapping_is_default(self) -> None:
        assert ExpansionConfig.from_mapping({}) == ExpansionConfig()


class TestMerged:
    """Tests for ExpansionConfig.merged."""

    def test_none_overrides_ignored(self) -> None:
        config = ExpansionConfig(strict=True)
        assert config.merged(strict=None, markers=None) == config

    def test_override_applied(self) -> None:
        merged = ExpansionConfig().merged(strict=True)
        assert merged.strict is True

    def test_original_unchanged(self) -> None:
        config = ExpansionConfig()
        config.merged(strict=True)
        assert config.strict is False

    def test_invalid_override_validated(self) -> None:
        with pytest.raises(ConfigError):
            ExpansionConfig().merged(markers=frozenset())
