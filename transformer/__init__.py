"""Transformer module for converting schedule data to output formats."""

from .base import BaseTransformer
from .ical_transformer import ICalTransformer

__all__ = ["BaseTransformer", "ICalTransformer"]
