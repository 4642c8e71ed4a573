"""
Boundary adapters: relational post store and vector indexes.
"""
