"""Infrastructure layer — XML files, archives, and sandbox filesystem I/O.

This layer depends on stdlib and the domain layer only.
It must never import from services, commands, or output.
"""
