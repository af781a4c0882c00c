"""Configuration management for Images Manager."""

import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
import configparser
import json


@dataclass
class WebConfig:
    """Web interface configuration settings."""
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    max_content_length: int = 16 * 1024 * 1024  # 16MB


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = True
    file_path: Optional[Path] = None
    file_max_size_mb: int = 10
    file_backup_count: int = 5
    console_enabled: bool = True

    def __post_init__(self):
        if self.file_path is None:
            self.file_path = Path.home() / ".images_manager" / "logs" / "app.log"


@dataclass
class MutationConfig:
    """Settings for move, rename and delete operations."""
    audit_enabled: bool = True


@dataclass
class AppConfig:
    """Main application configuration."""
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    mutations: MutationConfig = field(default_factory=MutationConfig)

    app_name: str = "Images Manager"
    version: str = "0.1.0"
    data_dir: Path = field(default_factory=lambda: Path.home() / ".images_manager")

    def __post_init__(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)

        if self.logging.file_enabled and self.logging.file_path:
            self.logging.file_path.parent.mkdir(parents=True, exist_ok=True)


class ConfigManager:
    """Manages application configuration stored in an INI file."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        if config_file is None:
            config_file = Path.home() / ".images_manager" / "config.ini"

        self.config_file = Path(config_file)
        self.config = AppConfig()
        self.logger = logging.getLogger(__name__)

        if self.config_file.exists():
            self.load_from_file()
        else:
            self.save_to_file()

    def load_from_file(self) -> None:
        """Load configuration from INI file."""
        try:
            parser = configparser.ConfigParser(interpolation=None)
            parser.read(self.config_file)

            if 'web' in parser:
                web_section = parser['web']
                if 'host' in web_section:
                    self.config.web.host = web_section.get('host')
                if 'port' in web_section:
                    self.config.web.port = web_section.getint('port')
                if 'debug' in web_section:
                    self.config.web.debug = web_section.getboolean('debug')
                if 'max_content_length' in web_section:
                    self.config.web.max_content_length = web_section.getint('max_content_length')

            if 'logging' in parser:
                log_section = parser['logging']
                if 'level' in log_section:
                    self.config.logging.level = log_section.get('level')
                if 'format' in log_section:
                    self.config.logging.format = log_section.get('format')
                if 'file_enabled' in log_section:
                    self.config.logging.file_enabled = log_section.getboolean('file_enabled')
                if 'file_path' in log_section:
                    self.config.logging.file_path = Path(log_section.get('file_path'))
                if 'file_max_size_mb' in log_section:
                    self.config.logging.file_max_size_mb = log_section.getint('file_max_size_mb')
                if 'file_backup_count' in log_section:
                    self.config.logging.file_backup_count = log_section.getint('file_backup_count')
                if 'console_enabled' in log_section:
                    self.config.logging.console_enabled = log_section.getboolean('console_enabled')

            if 'mutations' in parser:
                mutation_section = parser['mutations']
                if 'audit_enabled' in mutation_section:
                    self.config.mutations.audit_enabled = mutation_section.getboolean('audit_enabled')

            self.logger.info(f"Configuration loaded from {self.config_file}")

        except (configparser.Error, ValueError) as e:
            self.logger.error(f"Error loading configuration from {self.config_file}: {e}")

    def save_to_file(self) -> None:
        """Save current configuration to INI file."""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            parser = configparser.ConfigParser(interpolation=None)
            parser['web'] = {
                'host': self.config.web.host,
                'port': str(self.config.web.port),
                'debug': str(self.config.web.debug),
                'max_content_length': str(self.config.web.max_content_length)
            }
            parser['logging'] = {
                'level': self.config.logging.level,
                'format': self.config.logging.format,
                'file_enabled': str(self.config.logging.file_enabled),
                'file_path': str(self.config.logging.file_path),
                'file_max_size_mb': str(self.config.logging.file_max_size_mb),
                'file_backup_count': str(self.config.logging.file_backup_count),
                'console_enabled': str(self.config.logging.console_enabled)
            }
            parser['mutations'] = {
                'audit_enabled': str(self.config.mutations.audit_enabled)
            }

            with open(self.config_file, 'w') as f:
                parser.write(f)

            self.logger.info(f"Configuration saved to {self.config_file}")

        except OSError as e:
            self.logger.error(f"Error saving configuration to {self.config_file}: {e}")

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config

    def update_config(self, section: str, **kwargs) -> None:
        """
        Update values of one configuration section and persist them.

        Args:
            section: Section name (web, logging or mutations)
            **kwargs: Settings to update within the section

        Raises:
            ValueError: If the section or a setting is unknown
        """
        if section not in ('web', 'logging', 'mutations'):
            raise ValueError(f"Unknown configuration section: {section}")

        section_obj = getattr(self.config, section)
        for key in kwargs:
            if not hasattr(section_obj, key):
                raise ValueError(f"Unknown setting '{key}' in section '{section}'")

        for key, value in kwargs.items():
            setattr(section_obj, key, value)

        self.save_to_file()

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = AppConfig()
        self.save_to_file()
        self.logger.info("Configuration reset to defaults")

    def to_dict(self) -> dict:
        return {
            'web': {
                'host': self.config.web.host,
                'port': self.config.web.port,
                'debug': self.config.web.debug,
                'max_content_length': self.config.web.max_content_length
            },
            'logging': {
                'level': self.config.logging.level,
                'format': self.config.logging.format,
                'file_enabled': self.config.logging.file_enabled,
                'file_path': str(self.config.logging.file_path),
                'file_max_size_mb': self.config.logging.file_max_size_mb,
                'file_backup_count': self.config.logging.file_backup_count,
                'console_enabled': self.config.logging.console_enabled
            },
            'mutations': {
                'audit_enabled': self.config.mutations.audit_enabled
            }
        }

    def export_to_json(self, file_path: Path) -> None:
        """
        Export configuration to JSON format.

        Args:
            file_path: Path to save JSON file
        """
        with open(file_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        self.logger.info(f"Configuration exported to {file_path}")


# Global configuration instance
_config_manager = None


def get_config() -> AppConfig:
    """Get the global application configuration."""
    return get_config_manager().get_config()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def setup_config(config_file: Optional[Path] = None) -> ConfigManager:
    """
    Set up global configuration.

    Args:
        config_file: Optional path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager
