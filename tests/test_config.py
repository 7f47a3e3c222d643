"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tutorhost.config import Config, ContentConfig, ServerConfig


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "tutorhost.toml"
        config_file.write_text("""
[server]
host = "0.0.0.0"
port = 3000

[content]
source_dir = "content/tutorial"
cache_dir = ".tutorhost-cache"
cache_enabled = false

[redirects]
"old-slug" = "new-slug"
""")

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3000
        assert config.content.source_dir == tmp_path / "content/tutorial"
        assert config.content.cache_dir == tmp_path / ".tutorhost-cache"
        assert config.content.cache_enabled is False
        assert config.redirects == {"old-slug": "new-slug"}
        assert config.config_path == config_file

    def test__minimal_config__uses_defaults(self, tmp_path: Path) -> None:
        """Load minimal config with defaults relative to config file."""
        config_file = tmp_path / "tutorhost.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.content.source_dir == tmp_path / "tutorial"
        assert config.content.cache_dir == tmp_path / ".cache"
        assert config.content.cache_enabled is True
        assert config.redirects == {"local-transitions": "global-transitions"}

    def test__missing_explicit_path__raises_file_not_found(self, tmp_path: Path) -> None:
        """Fail when explicit config file doesn't exist."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.toml")

    def test__discovery__finds_config_in_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Find tutorhost.toml in a parent directory."""
        config_file = tmp_path / "tutorhost.toml"
        config_file.write_text("[server]\nport = 9000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.server.port == 9000
        assert config.config_path == config_file

    def test__empty_redirects_table__disables_redirects(self, tmp_path: Path) -> None:
        """Replace the built-in redirects with an empty table."""
        config_file = tmp_path / "tutorhost.toml"
        config_file.write_text("[redirects]\n")

        assert Config.load(config_file).redirects == {}

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('server = "x"', "server section must be a dictionary"),
            ("[server]\nhost = 1", "server.host must be a string"),
            ('[server]\nport = "80"', "server.port must be an integer"),
            ("[server]\nport = true", "server.port must be an integer"),
            ("content = 1", "content section must be a dictionary"),
            ("[content]\nsource_dir = 1", "content.source_dir must be a string"),
            ("[content]\ncache_dir = []", "content.cache_dir must be a string"),
            ('[content]\ncache_enabled = "yes"', "content.cache_enabled must be a boolean"),
            ('redirects = "x"', "redirects section must be a dictionary"),
            ("[redirects]\nold = 1", "redirects.old must be a string"),
        ],
    )
    def test__invalid_value__raises_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        """Reject values of the wrong type."""
        config_file = tmp_path / "tutorhost.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides__replace_values(self) -> None:
        """Apply non-None overrides."""
        config = Config(server=ServerConfig(), content=ContentConfig())

        result = config.with_overrides(
            host="0.0.0.0",
            port=9000,
            source_dir=Path("/srv/tutorial"),
            cache_dir=Path("/tmp/cache"),
            cache_enabled=False,
        )

        assert result.server == ServerConfig(host="0.0.0.0", port=9000)
        assert result.content == ContentConfig(
            source_dir=Path("/srv/tutorial"),
            cache_dir=Path("/tmp/cache"),
            cache_enabled=False,
        )

    def test__no_overrides__keep_values(self) -> None:
        """Keep existing values when overrides are None."""
        config = Config(
            server=ServerConfig(port=3000),
            content=ContentConfig(source_dir=Path("docs")),
            redirects={"a": "b"},
        )

        result = config.with_overrides()

        assert result == config

    def test__overrides__do_not_mutate_original(self) -> None:
        """Leave the original config untouched."""
        config = Config(server=ServerConfig(), content=ContentConfig())

        config.with_overrides(port=1234)

        assert config.server.port == 8080
