"""Core Layer — errors, validators and boundary protocols. No IO.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
"""
