"""Config tests."""

import os

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_IGNORE, Config


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.list_max_entries == 1000
        assert config.search_max_lines == 500
        assert config.search_max_buffer_bytes == 1024 * 1024
        assert config.default_ignore == [".git", "node_modules", "dist", "coverage"]
        assert config.grep_binary == "grep"

    def test_default_ignore_not_shared(self):
        config = Config()
        config.default_ignore.append("build")
        assert DEFAULT_IGNORE == [".git", "node_modules", "dist", "coverage"]

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WORKSPACE_ROOT", str(tmp_path))
        monkeypatch.setenv("LIST_MAX_ENTRIES", "10")
        monkeypatch.setenv("SEARCH_MAX_LINES", "20")
        monkeypatch.setenv("SEARCH_MAX_BUFFER_BYTES", "4096")
        monkeypatch.setenv("SEARCH_TIMEOUT_SEC", "0")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("GREP_BINARY", "ggrep")
        config = Config.from_env()
        assert config.resolve_root() == str(tmp_path)
        assert config.list_max_entries == 10
        assert config.search_max_lines == 20
        assert config.search_max_buffer_bytes == 4096
        assert config.search_timeout_sec is None
        assert config.debug is True
        assert config.grep_binary == "ggrep"

    def test_resolve_root_defaults_to_cwd(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert Config().resolve_root() == os.path.abspath(os.getcwd())

    def test_rejects_non_positive_limits(self):
        with pytest.raises(ValidationError):
            Config(list_max_entries=0)
