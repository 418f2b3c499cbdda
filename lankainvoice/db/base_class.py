from decimal import Decimal
from typing import Any

from sqlalchemy import Numeric
from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    # Money columns default to two decimal places
    type_annotation_map = {Decimal: Numeric(14, 2)}

    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore
        return cls.__name__.lower()

    def as_dict(self, *fields: str) -> dict[str, Any]:
        """Column values, optionally restricted to ``fields``."""
        keys = fields or [c.key for c in self.__table__.columns]
        return {key: getattr(self, key) for key in keys}
