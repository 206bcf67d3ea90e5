"""Domain layer — article entity, dates, front matter, text editing.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
