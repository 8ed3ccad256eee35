"""Domain layer — errors, key handling, setter resolution, parameters.

This layer depends only on stdlib and pydantic.
It must never import from services or config.
"""
