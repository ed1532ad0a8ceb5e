"""Tests for wren.config: LoaderConfig frozen dataclass."""

import pytest

from wren.config import LoaderConfig
from wren.directives import DirectiveSyntax
from wren.errors import ConfigurationError


class TestLoaderConfig:
    def test_defaults(self) -> None:
        cfg = LoaderConfig()

        assert cfg.extension == ".html"
        assert cfg.encoding == "utf-8"
        assert cfg.strict is False
        assert cfg.autoescape is True
        assert cfg.trim_blocks is True
        assert cfg.lstrip_blocks is True
        assert cfg.content_type == "text/html; charset=utf-8"
        assert cfg.data_name == "data"
        assert cfg.directive == DirectiveSyntax()
        assert dict(cfg.filters) == {}
        assert dict(cfg.globals) == {}

    def test_override(self) -> None:
        cfg = LoaderConfig(extension=".kida", strict=True, autoescape=False)

        assert cfg.extension == ".kida"
        assert cfg.strict is True
        assert cfg.autoescape is False

    def test_frozen(self) -> None:
        cfg = LoaderConfig()

        with pytest.raises(AttributeError):
            cfg.strict = True  # type: ignore[misc]

    def test_defaults_not_shared(self) -> None:
        assert LoaderConfig().filters is not LoaderConfig().filters

    def test_valid_config_passes(self) -> None:
        LoaderConfig().validate()


class TestValidate:
    def test_empty_extension(self) -> None:
        with pytest.raises(ConfigurationError, match="extension"):
            LoaderConfig(extension="").validate()

    def test_extension_with_separator(self) -> None:
        with pytest.raises(ConfigurationError, match="separators"):
            LoaderConfig(extension="pages/.html").validate()

    def test_data_name_must_be_identifier(self) -> None:
        with pytest.raises(ConfigurationError, match="data_name"):
            LoaderConfig(data_name="my data").validate()

    def test_unknown_encoding(self) -> None:
        with pytest.raises(ConfigurationError, match="encoding"):
            LoaderConfig(encoding="not-a-codec").validate()

    def test_non_callable_filter(self) -> None:
        with pytest.raises(ConfigurationError, match="shout"):
            LoaderConfig(filters={"shout": "upper"}).validate()  # type: ignore[dict-item]

    def test_unknown_charset(self) -> None:
        with pytest.raises(ConfigurationError, match="charset"):
            LoaderConfig(content_type="text/html; charset=klingon").validate()


class TestCharset:
    def test_default(self) -> None:
        assert LoaderConfig().charset == "utf-8"

    def test_read_from_content_type(self) -> None:
        assert LoaderConfig(content_type="text/html; charset=latin-1").charset == "latin-1"
        assert LoaderConfig(content_type='text/html; Charset="ISO-8859-1"').charset == "ISO-8859-1"

    def test_missing_charset_means_utf8(self) -> None:
        assert LoaderConfig(content_type="application/xhtml+xml").charset == "utf-8"
