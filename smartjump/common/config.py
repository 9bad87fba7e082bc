"""Configuration file loading and management"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_PID_FILE = "~/.cache/smartjump/smartjump.pid"


@dataclass
class JumpConfig:
    """Cursor edge-jump settings"""
    enabled: bool = True
    edge_threshold: int = 5
    poll_interval_ms: int = 20
    cooldown_ms: int = 50

    @property
    def poll_interval_seconds(self) -> float:
        """Poll interval in seconds"""
        return self.poll_interval_ms / 1000.0

    @property
    def cooldown_seconds(self) -> float:
        """Jump cooldown in seconds"""
        return self.cooldown_ms / 1000.0


@dataclass
class FillConfig:
    """Window fill settings"""
    enabled: bool = True
    settle_delay_ms: int = 100

    @property
    def settle_delay_seconds(self) -> float:
        """Settle delay in seconds"""
        return self.settle_delay_ms / 1000.0


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class Config:
    """Complete application configuration"""
    display: Optional[str] = None
    pid_file: Optional[str] = DEFAULT_PID_FILE
    jump: JumpConfig = field(default_factory=JumpConfig)
    fill: FillConfig = field(default_factory=FillConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/smartjump/config.yml",
        "/etc/smartjump/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
            ValueError: If the document is not a mapping
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        # An empty file is a valid "all defaults" config
        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def section_get(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """
        Get an optional config section

        Args:
            data: Raw configuration dictionary
            name: Section key

        Returns:
            Section dictionary, empty if absent

        Raises:
            ValueError: If the section is present but not a mapping
        """
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a dictionary")
        return section

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Missing sections and keys fall back to defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            ValueError: If a value is out of range
        """
        jump_data = ConfigLoader.section_get(data, "jump")
        jump_defaults = JumpConfig()
        jump = JumpConfig(
            enabled=bool(jump_data.get("enabled", jump_defaults.enabled)),
            edge_threshold=int(jump_data.get("edge_threshold", jump_defaults.edge_threshold)),
            poll_interval_ms=int(jump_data.get("poll_interval_ms", jump_defaults.poll_interval_ms)),
            cooldown_ms=int(jump_data.get("cooldown_ms", jump_defaults.cooldown_ms)),
        )
        if jump.edge_threshold < 0:
            raise ValueError(f"jump.edge_threshold must be >= 0, got {jump.edge_threshold}")
        if jump.poll_interval_ms <= 0:
            raise ValueError(f"jump.poll_interval_ms must be > 0, got {jump.poll_interval_ms}")
        if jump.cooldown_ms < 0:
            raise ValueError(f"jump.cooldown_ms must be >= 0, got {jump.cooldown_ms}")

        fill_data = ConfigLoader.section_get(data, "fill")
        fill_defaults = FillConfig()
        fill = FillConfig(
            enabled=bool(fill_data.get("enabled", fill_defaults.enabled)),
            settle_delay_ms=int(fill_data.get("settle_delay_ms", fill_defaults.settle_delay_ms)),
        )
        if fill.settle_delay_ms < 0:
            raise ValueError(f"fill.settle_delay_ms must be >= 0, got {fill.settle_delay_ms}")

        logging_data = ConfigLoader.section_get(data, "logging")
        logging_defaults = LoggingConfig()
        logging = LoggingConfig(
            level=str(logging_data.get("level", logging_defaults.level)),
            file=logging_data.get("file"),
            format=logging_data.get("format", logging_defaults.format),
        )

        return Config(
            display=data.get("display"),
            pid_file=data.get("pid_file", DEFAULT_PID_FILE),
            jump=jump,
            fill=fill,
            logging=logging,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard
                locations and falls back to defaults when none exists.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                return Config()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                display=":1",
                edge_threshold=3
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("display") is not None:
            config.display = overrides["display"]
        if overrides.get("edge_threshold") is not None:
            config.jump.edge_threshold = overrides["edge_threshold"]
        if overrides.get("jump_enabled") is not None:
            config.jump.enabled = overrides["jump_enabled"]
        if overrides.get("fill_enabled") is not None:
            config.fill.enabled = overrides["fill_enabled"]

        return config
