"""
Configuration Management
========================

Provides a centralized configuration system with:
- YAML file loading
- Environment variable overrides
- Default values
- Range validation
- Singleton pattern for global access
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class BuildingConfig:
    """Building topology."""
    floors: int = 14
    mailroom_floor: int = 0

    @property
    def lowest_floor(self) -> int:
        return self.mailroom_floor

    @property
    def top_floor(self) -> int:
        return self.mailroom_floor + self.floors - 1


@dataclass
class RobotConfig:
    """Robot fleet configuration."""
    count: int = 3
    individual_max_weight: int = 2000
    max_delivery_legs: int = 2
    strict_stray_items: bool = False


@dataclass
class MailConfig:
    """Mail generation configuration."""
    mail_to_create: int = 80
    min_weight: int = 200
    max_weight: int = 2000
    last_arrival_time: int = 60


@dataclass
class SimulationConfig:
    """Simulation driver configuration."""
    seed: Optional[int] = 30006
    max_ticks: int = 10000


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "mailroom_sim.log"
    max_file_size: int = 10485760
    backup_count: int = 3
    console_enabled: bool = True


class Config:
    """
    Central configuration manager.

    Loads configuration from YAML file with environment variable overrides.
    Uses singleton pattern for global access.

    Usage:
        config = Config.load("config/simulation.yaml")
        # or
        config = get_config()  # Gets existing instance

        limit = config.robot.individual_max_weight
        floors = config.building.floors
    """

    _instance: Optional['Config'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if Config._initialized and config_path is None:
            return

        self._raw: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

        # Initialize sub-configs with defaults
        self.building = BuildingConfig()
        self.robot = RobotConfig()
        self.mail = MailConfig()
        self.simulation = SimulationConfig()
        self.logging = LoggingConfig()

        Config._initialized = True

    @classmethod
    def load(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        instance = cls(config_path)
        instance._load_file(config_path)
        return instance

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None
        cls._initialized = False

    def _load_file(self, config_path: str) -> None:
        """Load and parse YAML configuration file."""
        path = Path(config_path)

        # Search for config file in common locations
        search_paths = [
            path,
            Path(__file__).parent.parent.parent / "config" / path.name,
            Path.home() / ".config" / "mailroom_robots" / path.name,
            Path("/etc/mailroom_robots") / path.name,
        ]

        for search_path in search_paths:
            if search_path.exists():
                self._config_path = search_path
                break

        if self._config_path is None or not self._config_path.exists():
            logger.warning(f"Config file not found: {config_path}, using defaults")
            self._apply_env_overrides()
            return

        try:
            with open(self._config_path, 'r') as f:
                self._raw = yaml.safe_load(f) or {}
            logger.info(f"Loaded config from: {self._config_path}")
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config {self._config_path}: {e}") from e

        self._parse_config()
        self._apply_env_overrides()
        self.validate()

    def _parse_config(self) -> None:
        """Parse raw config into typed dataclasses."""
        # Building
        if 'building' in self._raw:
            b = self._raw['building']
            self.building = BuildingConfig(
                floors=b.get('floors', 14),
                mailroom_floor=b.get('mailroom_floor', 0),
            )

        # Robots
        if 'robot' in self._raw:
            r = self._raw['robot']
            self.robot = RobotConfig(
                count=r.get('count', 3),
                individual_max_weight=r.get('individual_max_weight', 2000),
                max_delivery_legs=r.get('max_delivery_legs', 2),
                strict_stray_items=r.get('strict_stray_items', False),
            )

        # Mail generation
        if 'mail' in self._raw:
            m = self._raw['mail']
            weight = m.get('weight', {})
            self.mail = MailConfig(
                mail_to_create=m.get('mail_to_create', 80),
                min_weight=weight.get('min', 200),
                max_weight=weight.get('max', 2000),
                last_arrival_time=m.get('last_arrival_time', 60),
            )

        # Simulation
        if 'simulation' in self._raw:
            s = self._raw['simulation']
            self.simulation = SimulationConfig(
                seed=s.get('seed', 30006),
                max_ticks=s.get('max_ticks', 10000),
            )

        # Logging
        if 'logging' in self._raw:
            log = self._raw['logging']
            self.logging = LoggingConfig(
                level=log.get('level', 'INFO'),
                file_enabled=log.get('file_enabled', False),
                file_path=log.get('file_path', 'mailroom_sim.log'),
                max_file_size=log.get('max_file_size', 10485760),
                backup_count=log.get('backup_count', 3),
                console_enabled=log.get('console_enabled', True),
            )

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if os.environ.get('MAILROOM_SEED'):
            self.simulation.seed = int(os.environ['MAILROOM_SEED'])
        if os.environ.get('MAILROOM_ROBOTS'):
            self.robot.count = int(os.environ['MAILROOM_ROBOTS'])
        if os.environ.get('MAILROOM_FLOORS'):
            self.building.floors = int(os.environ['MAILROOM_FLOORS'])
        if os.environ.get('MAILROOM_MAIL_COUNT'):
            self.mail.mail_to_create = int(os.environ['MAILROOM_MAIL_COUNT'])
        if os.environ.get('MAILROOM_MAX_WEIGHT'):
            self.mail.max_weight = int(os.environ['MAILROOM_MAX_WEIGHT'])

        # Logging
        if os.environ.get('MAILROOM_LOG_LEVEL'):
            self.logging.level = os.environ['MAILROOM_LOG_LEVEL']

    def validate(self) -> None:
        """Reject values the simulation cannot run with."""
        if self.building.floors < 2:
            raise ConfigError("building.floors must be at least 2")
        if self.robot.count < 1:
            raise ConfigError("robot.count must be at least 1")
        if self.robot.individual_max_weight <= 0:
            raise ConfigError("robot.individual_max_weight must be positive")
        if self.robot.max_delivery_legs < 1:
            raise ConfigError("robot.max_delivery_legs must be at least 1")
        if self.mail.mail_to_create < 0:
            raise ConfigError("mail.mail_to_create must not be negative")
        if not 0 < self.mail.min_weight <= self.mail.max_weight:
            raise ConfigError("mail weight range must satisfy 0 < min <= max")
        if self.mail.last_arrival_time < 1:
            raise ConfigError("mail.last_arrival_time must be at least 1")
        if self.simulation.max_ticks < 1:
            raise ConfigError("simulation.max_ticks must be at least 1")

    def get(self, key: str, default: Any = None) -> Any:
        """Get raw config value by dot-notation key."""
        keys = key.split('.')
        value = self._raw
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def __repr__(self) -> str:
        return (f"Config(path={self._config_path}, robots={self.robot.count}, "
                f"floors={self.building.floors})")


# Global config accessor
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config(config_path: str) -> Config:
    """Load configuration from file and set as global."""
    global _config
    _config = Config.load(config_path)
    return _config
