"""Configuration management for Tutorhost.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from tutorhost.core.router import DEFAULT_REDIRECTS

CONFIG_FILENAME = "tutorhost.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ContentConfig:
    """Tutorial content configuration."""

    source_dir: Path = field(default_factory=lambda: Path("tutorial"))
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))
    cache_enabled: bool = True


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    redirects: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_REDIRECTS))
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for tutorhost.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(server=ServerConfig(), content=ContentConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            content=cls._parse_content(data.get("content"), config_dir),
            redirects=cls._parse_redirects(data.get("redirects")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig(
                source_dir=config_dir / "tutorial",
                cache_dir=config_dir / ".cache",
            )

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        source_dir = data.get("source_dir", "tutorial")
        if not isinstance(source_dir, str):
            raise ValueError("content.source_dir must be a string")

        cache_dir = data.get("cache_dir", ".cache")
        if not isinstance(cache_dir, str):
            raise ValueError("content.cache_dir must be a string")

        cache_enabled = data.get("cache_enabled", True)
        if not isinstance(cache_enabled, bool):
            raise ValueError("content.cache_enabled must be a boolean")

        return ContentConfig(
            source_dir=config_dir / source_dir,
            cache_dir=config_dir / cache_dir,
            cache_enabled=cache_enabled,
        )

    @classmethod
    def _parse_redirects(cls, data: object) -> dict[str, str]:
        """Parse redirects table.

        A present table replaces the built-in redirects entirely.

        Args:
            data: Raw redirects table mapping deprecated to canonical slugs

        Returns:
            Redirect mapping
        """
        if data is None:
            return dict(DEFAULT_REDIRECTS)

        if not isinstance(data, dict):
            raise ValueError("redirects section must be a dictionary")

        redirects: dict[str, str] = {}
        for old, new in data.items():
            if not isinstance(new, str):
                raise ValueError(f"redirects.{old} must be a string")
            redirects[old] = new
        return redirects

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        cache_dir: Path | None = None,
        cache_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override content.source_dir
            cache_dir: Override content.cache_dir
            cache_enabled: Override content.cache_enabled

        Returns:
            New Config instance with overrides applied
        """
        server = replace(
            self.server,
            host=host if host is not None else self.server.host,
            port=port if port is not None else self.server.port,
        )
        content = replace(
            self.content,
            source_dir=source_dir if source_dir is not None else self.content.source_dir,
            cache_dir=cache_dir if cache_dir is not None else self.content.cache_dir,
            cache_enabled=(
                cache_enabled if cache_enabled is not None else self.content.cache_enabled
            ),
        )
        return replace(self, server=server, content=content)
