"""Identity: user model and access token verification."""
