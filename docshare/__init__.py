"""docshare: document sharing API with owner-managed access roles."""

__version__ = "0.1.0"
