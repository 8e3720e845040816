"""
Shared column helpers for the ORM models.
"""
import enum
import uuid
from datetime import datetime, timezone
from typing import Type

from sqlalchemy import Enum as SQLEnum, Uuid


def utcnow() -> datetime:
    """Timezone-aware current time used for column defaults."""
    return datetime.now(timezone.utc)


def new_id() -> uuid.UUID:
    return uuid.uuid4()


def uuid_column_type() -> Uuid:
    """UUID stored natively on PostgreSQL and as CHAR(32) elsewhere."""
    return Uuid(as_uuid=True)


def str_enum(enum_cls: Type[enum.Enum], name: str) -> SQLEnum:
    """
    Enum column that stores the lowercase member values ('pending', 'admin', ...)
    rather than the member names, as a VARCHAR with a CHECK constraint.
    """
    return SQLEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )
