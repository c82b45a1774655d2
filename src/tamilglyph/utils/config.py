"""
Configuration loader and manager.
Handles loading the YAML glyph tables and providing access to settings.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"
GLYPH_TABLES_FILE = "glyph_tables.yaml"


class Config:
    """Configuration manager for the glyph converter."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files. Defaults to
                the tables shipped with the package.
        """
        self.config_dir = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
        self._glyphs_config = None

    @property
    def glyphs(self) -> Dict[str, Any]:
        """Load and return the glyph tables of the target font."""
        if self._glyphs_config is None:
            config_path = self.config_dir / GLYPH_TABLES_FILE
            with open(config_path, 'r', encoding='utf-8') as f:
                self._glyphs_config = yaml.safe_load(f) or {}
            logger.debug("Loaded glyph tables from %s", config_path)
        return self._glyphs_config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Path to config value (e.g., 'glyphs.special_tokens')
            default: Default value if key not found

        Returns:
            Configuration value

        Example:
            >>> config = Config()
            >>> letters = config.get('glyphs.letters')
        """
        keys = key_path.split('.')

        if keys[0] == 'glyphs':
            keys = keys[1:]

        return self._get_nested(self.glyphs, keys, default)

    @staticmethod
    def _get_nested(config: Dict, keys: list, default: Any = None) -> Any:
        """Helper to get nested dictionary values."""
        current = config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current


# Global config instance
_global_config = None


def get_config() -> Config:
    """Get global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = Config()
    return _global_config
