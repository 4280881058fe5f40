"""Domain layer — the graph engine, its types, errors, and edge-list reader.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
