"""Domain layer — statuses, models, state tree, and roll-ups.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
