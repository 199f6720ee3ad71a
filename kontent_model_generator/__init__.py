"""Generate TypeScript models for the Kontent.ai Delivery SDK."""

__version__ = "0.1.0"
