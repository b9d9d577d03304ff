"""Configuration management for the Tally CLI application."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "TALLY_DATA_DIR"


@dataclass
class ConfigModel:
    """Global configuration model for Tally CLI."""

    # File paths
    data_dir: str = "~/.tally"
    tasks_file: str = "tasks.md"

    # UI and logging
    no_color: bool = False
    show_banner: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        """Post-initialization setup."""
        env_dir = os.environ.get(DATA_DIR_ENV)
        if env_dir:
            self.data_dir = env_dir
        self.data_dir = os.path.expanduser(self.data_dir)
        self.log_level = str(self.log_level).upper()

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_dir": self.data_dir,
            "tasks_file": self.tasks_file,
            "no_color": self.no_color,
            "show_banner": self.show_banner,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(sorted(unknown)))

        return cls(**{k: v for k, v in data.items() if k in known})

    def get_tasks_path(self) -> Path:
        """Get the task file path."""
        return Path(self.data_dir) / self.tasks_file

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"


class Config:
    """Configuration manager for Tally CLI."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or create default."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    config = ConfigModel.from_yaml(f.read())
                logger.debug("Loaded configuration from %s", config_path)
            except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
                logger.warning("Failed to load config from %s: %s; using defaults", config_path, e)
        else:
            cls.save(config, config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(config.to_yaml())
            logger.debug("Configuration saved to %s", config_path)
        except OSError as e:
            logger.warning("Failed to save config to %s: %s", config_path, e)

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached configuration (useful for testing)."""
        cls._instance = None


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)
