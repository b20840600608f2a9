"""Catalog RAG: similar-product lookup and grounded Q&A over a product catalog."""

__version__ = "1.0.0"
