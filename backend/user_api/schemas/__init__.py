"""Pydantic Schemas — user record, error body and the dispatcher envelope.

Invariants:
    - Schemas validate at system boundary (request bodies, store items)
"""
