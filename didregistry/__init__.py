"""Registry of decentralized identifier documents: data model, instructions and processor."""

__version__ = "0.1.0"
__all__ = ["models", "instruction", "processor"]