"""HODLR matrices stored as trees: SVD compression, vector and matrix products, and a demo command."""

__version__ = "0.1.0"
__all__ = ["errors", "svd", "lowrank", "tree", "compress", "algebra", "cli"]