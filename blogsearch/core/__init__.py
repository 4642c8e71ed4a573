"""Core domain logic: indexing pipeline and hybrid search."""
