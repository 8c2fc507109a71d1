# backend/jobswipe/models/__init__.py

# This file imports all the models, making them available
# to the SQLAlchemy Base and resolving relationship names.

from .user import User, Role
from .company import Company
from .job import Job
from .swipe import Swipe, SwipeDirection
from .match import Match
from .message import Message
from .notification import Notification
from .subscription import Subscription, Plan
from .outbox import OutboxEvent
from .activity_log import ActivityLog
