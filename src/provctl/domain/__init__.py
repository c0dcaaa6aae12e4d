"""Domain layer — versions, bindings, layout, and rendered content.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
