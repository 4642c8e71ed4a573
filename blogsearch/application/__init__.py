"""
Application layer: post writes and deferred indexing orchestration.
"""
