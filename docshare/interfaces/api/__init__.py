"""
HTTP API adapters.
"""
