"""
Application layer: use cases orchestrating domain policy and repositories.
"""
