"""Entity Services — one class per aggregate, constructed with an AsyncSession.

Invariants:
    - Services never import FastAPI; HTTP mapping lives in api/
    - Business-rule outcomes are returned as tagged results, not raised
"""
