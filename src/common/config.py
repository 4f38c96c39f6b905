"""Configuration loader for the transcript pipeline.

Settings that are safe to commit (paths, pacing, channel links, tag limits)
live in YAML files under ``common/configs``. Secrets such as the Data API key
come from the environment, usually via a ``.env`` file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

import yaml

from common.errors import MissingConfigError

T = TypeVar("T")

CONFIG_DIR = Path(__file__).parent / "configs"


@dataclass
class PathsConfig:
    transcripts_dir: str = "transcripts"
    descriptions_dir: str = "descriptions"
    posts_dir: str = "blog-posts"
    credentials_dir: str = "credentials"
    token_path: str = "youtube_tokens.json"
    transcripts_ledger: str = "downloaded.json"
    descriptions_ledger: str = "descriptions_processed.json"
    posts_ledger: str = "posts_processed.json"
    publish_ledger: str = "descriptions_pushed.json"


@dataclass
class YouTubeConfig:
    page_size: int = 50
    read_delay_seconds: float = 0.5
    write_delay_seconds: float = 1.0
    request_timeout: int = 30
    transcript_languages: list[str] = field(default_factory=lambda: ["en"])


@dataclass
class ChannelConfig:
    name: str = ""
    website: str = ""


@dataclass
class DescriptionConfig:
    max_hashtags: int = 3
    base_tags: list[str] = field(default_factory=list)
    default_category: str = "vlog"


@dataclass
class PostConfig:
    description_length: int = 160
    max_tags: int = 5
    embed_import: str = "import YouTubeEmbed from '../../../components/YouTubeEmbed.astro';"
    projects: dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    paths: PathsConfig = field(default_factory=PathsConfig)
    youtube: YouTubeConfig = field(default_factory=YouTubeConfig)
    channel: ChannelConfig = field(default_factory=ChannelConfig)
    descriptions: DescriptionConfig = field(default_factory=DescriptionConfig)
    posts: PostConfig = field(default_factory=PostConfig)


def find_config_path(
    config_name: str | None,
    config_dir: Path = CONFIG_DIR,
    default_name: str = "prod",
    env_var: str | None = "CONFIG_ENV",
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml) or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        MissingConfigError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise MissingConfigError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict (empty dict for an empty file)."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CONFIG_ENV env var or "prod".
    """
    return _parse_config(load_yaml(find_config_path(config_name)))


def _parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object.

    Unknown keys are ignored; missing keys fall back to dataclass defaults.
    """
    return Config(
        paths=_build(PathsConfig, data.get("paths")),
        youtube=_build(YouTubeConfig, data.get("youtube")),
        channel=_build(ChannelConfig, data.get("channel")),
        descriptions=_build(DescriptionConfig, data.get("descriptions")),
        posts=_build(PostConfig, data.get("posts")),
    )


def _build(cls: type[T], section: dict | None) -> T:
    section = section or {}
    known = {name: section[name] for name in cls.__dataclass_fields__ if name in section}
    return cls(**known)


def require_env(name: str) -> str:
    """Return a required environment variable or raise a fatal config error."""
    value = os.environ.get(name)
    if not value:
        raise MissingConfigError(f"{name} not set (add it to your environment or .env file)")
    return value
