"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: Wikipedia endpoints and HTTP client settings
- RankingConfig: Over-fetch factor and quality thresholds
- FavoritesConfig: Location of the favorites blob store
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for Wikipedia API access.

    Attributes:
        api_url: Action API endpoint used for search queries
        rest_url: REST API base used for page summaries
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    api_url: str = "https://en.wikipedia.org/w/api.php"
    rest_url: str = "https://en.wikipedia.org/api/rest_v1"
    timeout_seconds: float = 20.0
    trust_env: bool = True
    user_agent: str = "LumeFeed/0.1 (https://github.com/lume-feed/lume-feed)"


@dataclass
class RankingConfig:
    """Configuration for candidate over-fetching and quality filtering.

    Attributes:
        over_fetch_factor: Search chains issued per requested article
        search_limit: Candidate pages requested per search query
        min_extract_length: Extracts must be strictly longer than this
        min_quality_score: Quality scores must be strictly greater than this
        default_count: Articles per feed load when the caller gives no count
    """

    over_fetch_factor: int = 3
    search_limit: int = 5
    min_extract_length: int = 100
    min_quality_score: float = 30.0
    default_count: int = 10


@dataclass
class FavoritesConfig:
    """Configuration for favorites persistence.

    Attributes:
        path: JSON file holding the blob store
        key: Store key under which the favorites list is written
        path_env: Environment variable that overrides path when set
    """

    path: str = "~/.lume/favorites.json"
    key: str = "SavedFavorites"
    path_env: str = "LUME_FAVORITES_PATH"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        dir: Directory for the log file; file logging is skipped when unset
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "lume.jsonl"
    dir: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    ranking: RankingConfig = field(default_factory=RankingConfig)
    favorites: FavoritesConfig = field(default_factory=FavoritesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig, one section at a time."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "api_url": cfg.fetch.api_url,
            "rest_url": cfg.fetch.rest_url,
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "ranking": {
            "over_fetch_factor": cfg.ranking.over_fetch_factor,
            "search_limit": cfg.ranking.search_limit,
            "min_extract_length": cfg.ranking.min_extract_length,
            "min_quality_score": cfg.ranking.min_quality_score,
            "default_count": cfg.ranking.default_count,
        },
        "favorites": {
            "path": cfg.favorites.path,
            "key": cfg.favorites.key,
            "path_env": cfg.favorites.path_env,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "dir": cfg.logging.dir,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        ranking=RankingConfig(**data["ranking"]),
        favorites=FavoritesConfig(**data["favorites"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_favorites_path(cfg: FavoritesConfig) -> Path:
    """Get favorites file path from environment override or config."""
    override = os.getenv(cfg.path_env)
    return Path(override or cfg.path).expanduser()
