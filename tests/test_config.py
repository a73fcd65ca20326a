# =============================================================================
# test_config.py - Tokenizer Configuration Tests
# =============================================================================
# Tests for TokenizerConfig defaults and environment overrides.
# =============================================================================

import pytest

from stamina_sdk.config import TokenizerConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Make sure no SMASM_* variables leak in from the developer's shell."""
    for name in (
        "SMASM_FILENAME",
        "SMASM_START_LINE",
        "SMASM_ENCODING",
        "SMASM_LEGACY_BINARY_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:

    def test_default_values(self):
        config = TokenizerConfig()
        assert config.default_filename == "(unknown)"
        assert config.start_line == 1
        assert config.encoding == "utf-8"
        assert config.legacy_binary_prefix is False

    def test_binary_prefixes(self):
        assert TokenizerConfig().binary_prefixes == "bB"
        assert TokenizerConfig(legacy_binary_prefix=True).binary_prefixes == "b"

    def test_from_env_without_variables(self):
        assert TokenizerConfig.from_env() == TokenizerConfig()


class TestFromEnv:

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("SMASM_FILENAME", "stdin.s")
        monkeypatch.setenv("SMASM_START_LINE", "20")
        monkeypatch.setenv("SMASM_ENCODING", "latin-1")
        monkeypatch.setenv("SMASM_LEGACY_BINARY_PREFIX", "yes")
        config = TokenizerConfig.from_env()
        assert config.default_filename == "stdin.s"
        assert config.start_line == 20
        assert config.encoding == "latin-1"
        assert config.legacy_binary_prefix is True

    @pytest.mark.parametrize("value", ["abc", "0", "-3"])
    def test_invalid_start_line_ignored(self, monkeypatch, value):
        monkeypatch.setenv("SMASM_START_LINE", value)
        assert TokenizerConfig.from_env().start_line == 1

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("TRUE", True),
        ("off", False),
        ("maybe", False),
    ])
    def test_legacy_binary_prefix_values(self, monkeypatch, value, expected):
        monkeypatch.setenv("SMASM_LEGACY_BINARY_PREFIX", value)
        assert TokenizerConfig.from_env().legacy_binary_prefix is expected
