# models/base.py
import enum
import re

from sqlalchemy import Enum
from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: MeterReading -> meter_readings
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'


def value_enum(enum_cls: type[enum.Enum], name: str) -> Enum:
     """Store the lowercase enum values rather than the member names."""
     return Enum(
          enum_cls,
          name=name,
          create_constraint=True,
          values_callable=lambda members: [m.value for m in members],
     )
