"""Core utilities for the sift filter engine."""

from sift.core.config import SiftConfig
from sift.core.logging import Logger, log, color_palette

__all__ = ["SiftConfig", "Logger", "log", "color_palette"]
