"""
Tests for loading configuration files.
"""

import logging
from pathlib import Path

import pytest

from ngxconf import parse
from ngxconf.config.loader import (
    ConfigError,
    ConfigLoader,
    ParseResult,
    SourceError,
    load_config,
)
from ngxconf.const import MAX_DEPTH_LIMIT


EXAMPLE_TEXT = (
    'foo "bar";\n'
    "server {\n"
    "  listen 80;\n"
    "  server_name foo.com;\n"
    "  root /home/ubuntu/sites/foo/;\n"
    "}\n"
)


@pytest.mark.parametrize(
    "name",
    [
        "example_config",
        "empty_config",
        "oneline_config",
        "onetokensemicolon_config",
        "empty_braces_config",
        "empty_nested_config",
        "escaped_char_config",
        "comments_config",
    ],
)
def test_valid_configs(loader: ConfigLoader, configs_dir: Path, name: str) -> None:
    result = loader.parse(configs_dir / name)

    assert result
    assert result.success is True
    assert result.config is not None
    assert result.error is None


@pytest.mark.parametrize(
    "name",
    [
        "invalid_statement_config",
        "nested_config_double_end_braces_config",
        "invalid_start_braces_config",
        "invalid_end_braces_config",
        "quoted_token_whitespace_config",
        "invalid_token_config",
        "invalid_token_only_braces_config",
    ],
)
def test_invalid_configs(loader: ConfigLoader, configs_dir: Path, name: str) -> None:
    result = loader.parse(configs_dir / name)

    assert not result
    assert result.config is None
    assert isinstance(result.error, ConfigError)
    assert not isinstance(result.error, SourceError)


def test_example_to_string(loader: ConfigLoader, configs_dir: Path) -> None:
    config = loader.load_file(configs_dir / "example_config")
    assert config.to_string(0) == EXAMPLE_TEXT


def test_example_statements(configs_dir: Path) -> None:
    config = load_config(configs_dir / "example_config")

    statement = config.statements[0]
    assert statement.tokens == ["foo", '"bar"']
    assert statement.child_block is None

    statement = config.statements[1]
    assert statement.tokens == ["server"]
    assert statement.child_block is not None

    child = statement.child_block
    assert child.statements[0].tokens == ["listen", "80"]
    assert child.statements[1].tokens == ["server_name", "foo.com"]
    assert child.statements[2].tokens == ["root", "/home/ubuntu/sites/foo/"]


def test_empty_config(configs_dir: Path) -> None:
    config = load_config(configs_dir / "empty_config")
    assert config.to_string(0) == ""


def test_escaped_chars(configs_dir: Path) -> None:
    config = load_config(configs_dir / "escaped_char_config")

    assert config.statements[0].tokens == ["foo", '"hello"world"']
    assert config.statements[1].tokens == ["bar", "'hello'world'"]


def test_empty_nested_is_canonical(configs_dir: Path) -> None:
    path = configs_dir / "empty_nested_config"
    assert load_config(path).to_string(0) == path.read_text()


def test_nonexistent_file(loader: ConfigLoader, configs_dir: Path) -> None:
    result = loader.parse(configs_dir / "na_config")

    assert not result
    assert isinstance(result.error, SourceError)
    assert "not found" in str(result.error)


def test_string_input_fails(loader: ConfigLoader) -> None:
    """Literal config text is not a path and must be rejected."""
    result = loader.parse(EXAMPLE_TEXT)

    assert not result
    assert isinstance(result.error, SourceError)


def test_directory_is_not_a_source(loader: ConfigLoader, tmp_path: Path) -> None:
    with pytest.raises(SourceError, match="Not a file"):
        loader.load_file(tmp_path)


def test_null_byte_path(loader: ConfigLoader) -> None:
    with pytest.raises(SourceError):
        loader.load_file("bad\x00path")


def test_invalid_utf8(loader: ConfigLoader, tmp_path: Path) -> None:
    path = tmp_path / "latin1.conf"
    path.write_bytes(b"server_name caf\xe9;\n")

    with pytest.raises(SourceError, match="not valid UTF-8"):
        loader.load_file(path)


def test_parse_error_is_chained(loader: ConfigLoader, write_config) -> None:
    path = write_config("server {\n  listen 80\n}\n")

    with pytest.raises(ConfigError) as exc_info:
        loader.load_file(path)

    assert exc_info.value.__cause__ is not None
    assert "Line 3, column 1" in str(exc_info.value)


def test_max_depth_passed_through(write_config) -> None:
    path = write_config("a { b { c; } }")

    assert ConfigLoader(max_depth=2).parse(path)
    assert not ConfigLoader(max_depth=1).parse(path)


def test_module_parse_function(write_config) -> None:
    result = parse(write_config("listen 80;"))

    assert isinstance(result, ParseResult)
    assert result.config.statements[0].tokens == ["listen", "80"]


def test_round_trip_through_file(loader: ConfigLoader, configs_dir: Path, write_config) -> None:
    canonical = loader.load_file(configs_dir / "comments_config").to_string(0)

    reparsed = loader.load_file(write_config(canonical, "canonical.conf"))
    assert reparsed.to_string(0) == canonical


def test_failed_parse_is_logged(
    loader: ConfigLoader, configs_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="ngxconf"):
        loader.parse(configs_dir / "invalid_token_only_braces_config")

    assert any("Block must follow at least one token" in r.getMessage() for r in caplog.records)


def test_max_depth_above_limit_rejected() -> None:
    with pytest.raises(ValueError, match="max_depth"):
        ConfigLoader(max_depth=5000)


def test_deeply_nested_file_fails_cleanly(write_config) -> None:
    path = write_config("a { " * 3000 + "b;" + " }" * 3000)

    result = ConfigLoader(max_depth=MAX_DEPTH_LIMIT).parse(path)

    assert not result
    assert result.config is None
    assert "Maximum nesting depth" in str(result.error)


def test_utf8_bom_is_accepted(loader: ConfigLoader, tmp_path: Path) -> None:
    path = tmp_path / "bom.conf"
    path.write_bytes(b"\xef\xbb\xbflisten 80;\n")

    config = loader.load_file(path)

    assert config.statements[0].tokens == ["listen", "80"]
    assert config.to_string(0) == "listen 80;\n"
