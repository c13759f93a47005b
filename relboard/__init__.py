"""Release board: compare two pending releases and stage a deployment."""

__version__ = "0.3.0"
