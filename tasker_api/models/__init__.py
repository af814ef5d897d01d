"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Ownership references (user_id, task_owner_id) are plain UUID columns

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from tasker_api.models.user import User  # noqa: F401
from tasker_api.models.profile import Profile  # noqa: F401
from tasker_api.models.task import Task  # noqa: F401
from tasker_api.models.payment import Payment  # noqa: F401
