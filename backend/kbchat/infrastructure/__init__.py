"""Infrastructure Layer — logging setup and the conversation registry.

Invariants:
    - Infrastructure never contains naming rules (those live in core/)
    - Stateful objects are reachable only through FastAPI dependencies or lifespan
"""
