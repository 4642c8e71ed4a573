"""
Blog hybrid search engine.

Lexical substring search supplemented by semantic vector search over
post embeddings, plus the pipeline that keeps those embeddings current.
"""

__version__ = "0.1.0"
