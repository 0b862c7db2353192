"""buildplan: resolve multi-module build configuration."""

__version__ = "0.1.0"
