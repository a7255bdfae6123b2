"""Services Layer: async persistence operations over the shared Store.

Invariants:
    - Services call core/ pure functions for decisions and only do IO themselves
"""
