"""The Insight Times newsroom: grounded articles with generated illustrations."""

__version__ = "1.0.0"
