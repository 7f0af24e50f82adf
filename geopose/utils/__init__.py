"""Utility helpers shared by the GeoPose scripts and examples."""

from geopose.utils.logger import LogLevel, create_logger

__all__ = ["LogLevel", "create_logger"]
