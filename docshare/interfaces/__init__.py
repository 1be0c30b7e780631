"""
Interface adapters (HTTP).
"""
