"""ORM Models: SQLAlchemy declarative models for persons, chores and assignments.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models are persistence shapes; the rest of the code passes core/domain_types values

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before alembic or tests use it
"""

from choreboard.models.person import PersonRow  # noqa: F401
from choreboard.models.chore import ChoreRow  # noqa: F401
from choreboard.models.assignment import AssignmentRow  # noqa: F401
