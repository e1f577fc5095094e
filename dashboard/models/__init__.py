"""ORM Models — SQLAlchemy tables for invoices, customers, users and roles.

Invariants:
    - Every model registers on db.base.Base.metadata when imported
    - Identifiers are opaque strings (uuid4 text), never reused

Design Decisions:
    - Import all models here so create_all sees the full schema
"""

from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.role import Role
from dashboard.models.user import User

__all__ = ["Customer", "Invoice", "Role", "User"]
