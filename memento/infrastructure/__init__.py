"""Infrastructure Layer — host clock, periodic scheduling, and logging setup.

Invariants:
    - Infrastructure never imports from services/
    - Host failures are mapped to MementoError subclasses before leaving this layer
"""
