"""uxrank: BM25-ranked design system recommendations."""

__version__ = "0.1.0"
