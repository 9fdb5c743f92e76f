"""Services Layer — user operations and HTTP method dispatch.

Invariants:
    - Dispatch uses explicit dict mapping (no auto-discovery)
"""
