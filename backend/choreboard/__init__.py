"""Choreboard Application Package: person and chore records over SQLite.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
