"""Configuration layer — settings models, TOML settings loading, logging setup."""
