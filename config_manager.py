"""
Configuration management for the Cyber Insights hub.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class LLMConfig:
    """LLM configuration settings."""
    provider: str
    api_key: str
    base_url: str
    model: str
    max_tokens: int
    temperature: float


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class CatalogConfig:
    """Catalog location settings."""
    catalog_file: str
    prompts_dir: str


@dataclass
class RecommendationConfig:
    """Recommendation engine tuning."""
    max_results: int
    diversity_min_pool: int
    jitter_enabled: bool
    jitter_magnitude: float
    jitter_seed: Optional[int]


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "web_app_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "llm": {
                "provider": "deepseek",
                "api_key": "",
                "base_url": "https://api.deepseek.com/v1",
                "model": "deepseek-chat",
                "max_tokens": 2000,
                "temperature": 0.2
            },
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False
            },
            "catalog": {
                "catalog_file": "catalog_service/data/articles.json",
                "prompts_dir": "catalog_service/prompts"
            },
            "recommendations": {
                "max_results": 3,
                "diversity_min_pool": 5,
                "jitter_enabled": True,
                "jitter_magnitude": 5.0,
                "jitter_seed": None
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # LLM settings
        if os.getenv("LLM_PROVIDER"):
            self._config["llm"]["provider"] = os.getenv("LLM_PROVIDER")

        if os.getenv("DEEPSEEK_API_KEY"):
            self._config["llm"]["api_key"] = os.getenv("DEEPSEEK_API_KEY")

        if os.getenv("OPENAI_API_BASE"):
            self._config["llm"]["base_url"] = os.getenv("OPENAI_API_BASE")

        if os.getenv("LLM_MODEL"):
            self._config["llm"]["model"] = os.getenv("LLM_MODEL")

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Catalog settings
        if os.getenv("CATALOG_FILE"):
            self._config["catalog"]["catalog_file"] = os.getenv("CATALOG_FILE")

        # Recommendation settings
        if os.getenv("RECO_MAX_RESULTS"):
            self._config["recommendations"]["max_results"] = int(os.getenv("RECO_MAX_RESULTS"))

        if os.getenv("RECO_DIVERSITY_MIN_POOL"):
            self._config["recommendations"]["diversity_min_pool"] = int(os.getenv("RECO_DIVERSITY_MIN_POOL"))

        if os.getenv("RECO_JITTER_ENABLED"):
            self._config["recommendations"]["jitter_enabled"] = os.getenv("RECO_JITTER_ENABLED").lower() == "true"

        if os.getenv("RECO_JITTER_SEED"):
            self._config["recommendations"]["jitter_seed"] = int(os.getenv("RECO_JITTER_SEED"))

    def get_llm_config(self) -> LLMConfig:
        """Get LLM configuration."""
        llm_config = self._config["llm"]
        return LLMConfig(
            provider=llm_config["provider"],
            api_key=llm_config["api_key"],
            base_url=llm_config["base_url"],
            model=llm_config["model"],
            max_tokens=llm_config["max_tokens"],
            temperature=llm_config["temperature"]
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_catalog_config(self) -> CatalogConfig:
        """Get catalog configuration."""
        catalog_config = self._config["catalog"]
        return CatalogConfig(
            catalog_file=catalog_config["catalog_file"],
            prompts_dir=catalog_config["prompts_dir"]
        )

    def get_recommendation_config(self) -> RecommendationConfig:
        """Get recommendation engine configuration."""
        reco_config = self._config["recommendations"]
        seed = reco_config.get("jitter_seed")
        return RecommendationConfig(
            max_results=int(reco_config["max_results"]),
            diversity_min_pool=int(reco_config["diversity_min_pool"]),
            jitter_enabled=bool(reco_config["jitter_enabled"]),
            jitter_magnitude=float(reco_config["jitter_magnitude"]),
            jitter_seed=int(seed) if seed is not None else None
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_llm_config() -> LLMConfig:
    """Get LLM configuration."""
    return config_manager.get_llm_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_catalog_config() -> CatalogConfig:
    """Get catalog configuration."""
    return config_manager.get_catalog_config()


def get_recommendation_config() -> RecommendationConfig:
    """Get recommendation engine configuration."""
    return config_manager.get_recommendation_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
