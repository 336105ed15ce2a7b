"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Reviews are evidence; restaurants and groups are subjects; users own points

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tastebud.models.user import User  # noqa: F401
from tastebud.models.restaurant import Restaurant  # noqa: F401
from tastebud.models.review import Review  # noqa: F401
from tastebud.models.taste_group import TasteGroup, GroupMember  # noqa: F401
from tastebud.models.tip import Tip  # noqa: F401
from tastebud.models.restaurant_submission import RestaurantSubmission  # noqa: F401
from tastebud.models.reward_grant import RewardGrant  # noqa: F401
