"""Services Layer — stateful shell around the pure core.

Invariants:
    - Services own snapshot storage; core functions stay pure
"""
