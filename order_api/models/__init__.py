"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Customer is the aggregate root for Order

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from order_api.models.user import User  # noqa: F401
from order_api.models.customer import Customer  # noqa: F401
from order_api.models.order import Order  # noqa: F401
