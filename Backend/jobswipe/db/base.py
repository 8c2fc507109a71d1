# In backend/jobswipe/db/base.py

from datetime import datetime, timezone
from sqlalchemy.orm import DeclarativeBase

# This is the base class which all the models inherit.
class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # Python-side timestamps keep sub-second ordering on every backend
    return datetime.now(timezone.utc)
