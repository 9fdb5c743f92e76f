"""Infrastructure Layer — DynamoDB store and logging setup.

Invariants:
    - All external calls wrapped with timeout and error mapping
"""
