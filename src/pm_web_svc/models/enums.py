"""Enumerations shared by the ORM models and a TypeDecorator storing them as text."""

from enum import Enum

from sqlalchemy.types import TypeDecorator, String as SQLString


class Methodology(Enum):
    """Delivery methodology of a program or project."""
    AGILE = "agile"
    WATERFALL = "waterfall"
    HYBRID = "hybrid"


class WorkStatus(Enum):
    """Lifecycle status of a program or project."""
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class Priority(Enum):
    """Priority levels used by programs, projects, tasks and cards."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(Enum):
    """Enum for task status values."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    BLOCKED = "blocked"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EnumValueType(TypeDecorator):
    """Custom SQLAlchemy TypeDecorator storing an Enum by its string value.

    Accepts either an enum member or a valid raw value on bind and always
    returns enum members on load.
    """
    impl = SQLString
    cache_ok = True

    def __init__(self, enum_cls, *args, **kwargs):
        self.enum_cls = enum_cls
        super().__init__(*args, **kwargs)

    def process_bind_param(self, value, dialect):
        """Convert enum member to string for database storage."""
        if value is None:
            return None
        if isinstance(value, self.enum_cls):
            return value.value
        if isinstance(value, str):
            try:
                return self.enum_cls(value).value
            except ValueError:
                valid = [member.value for member in self.enum_cls]
                raise ValueError(f"Invalid {self.enum_cls.__name__} value: {value}. Must be one of {valid}")
        raise ValueError(f"Invalid {self.enum_cls.__name__} type: {type(value)}. Must be enum or string.")

    def process_result_value(self, value, dialect):
        """Convert string from database to enum member."""
        if value is None:
            return None
        try:
            return self.enum_cls(value)
        except ValueError:
            raise ValueError(f"Invalid {self.enum_cls.__name__} value in database: {value}")


def enum_value(member):
    """Return the raw value of an enum member, passing None through."""
    return member.value if member is not None else None
