# src/tamilglyph/utils/__init__.py
from .config import Config, get_config
