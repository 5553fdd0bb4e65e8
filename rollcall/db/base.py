"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here for Alembic to detect them
from rollcall.db.models.profile import Profile  # noqa: F401, E402
from rollcall.db.models.attendance_session import AttendanceSession  # noqa: F401, E402
from rollcall.db.models.checkin import Checkin  # noqa: F401, E402
from rollcall.db.models.name_change_log import NameChangeLog  # noqa: F401, E402
