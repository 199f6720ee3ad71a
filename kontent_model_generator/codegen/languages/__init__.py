"""
SDK-specific model generators.

Each subpackage generates models for one SDK flavour.
"""

from .typescript import DeliveryModelGenerator

__all__ = ["DeliveryModelGenerator"]
