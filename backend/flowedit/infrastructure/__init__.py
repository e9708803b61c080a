"""Infrastructure Layer — logging setup and id generation.

Invariants:
    - Implements core protocols; never imported by core/
"""
