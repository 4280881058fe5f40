"""Infrastructure layer — adapters between the graph engine and third-party libraries.

Infrastructure may import from the domain layer.
It must never import from services, commands, or output.
"""
