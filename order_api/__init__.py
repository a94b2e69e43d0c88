"""Order Management API — customers, orders and token authentication.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
