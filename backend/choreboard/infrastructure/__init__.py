"""Infrastructure Layer: store connector, migrations and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver errors are mapped to core/errors.py types before leaving this layer
"""
