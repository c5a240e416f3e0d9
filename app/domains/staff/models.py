"""SQLAlchemy models for the Staff domain.

Employees hold any number of roles and work shifts. A shift belongs to one
employee, is worked in one role, and spans ``start_time`` to ``end_time``.
"""

from datetime import date, time

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Index, String, Table, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infra.database import Base

# Many-to-many link between employees and the roles they can work
employee_roles = Table(
    "employee_roles",
    Base.metadata,
    Column(
        "employee_id",
        ForeignKey("employees.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Role(Base):
    """A job role an employee can be assigned to.

    Attributes:
        name: Display name of the role
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"


class Employee(Base):
    """An employee who can be scheduled for shifts.

    Attributes:
        first_name: Given name
        last_name: Family name
        roles: Roles the employee may work
    """

    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    last_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )

    roles: Mapped[list[Role]] = relationship(
        Role,
        secondary=employee_roles,
        order_by=Role.id,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, name={self.first_name} {self.last_name})>"


class Shift(Base):
    """A scheduled work shift.

    Attributes:
        employee_id: Employee working the shift
        role_id: Role worked during the shift
        start_date: Calendar date the shift starts on
        end_date: Calendar date the shift ends on, always start_date
        start_time: Time of day the shift starts (inclusive)
        end_time: Time of day the shift ends (exclusive)
        role: The Role, loaded with the shift
    """

    __tablename__ = "shifts"

    employee_id: Mapped[int] = mapped_column(
        ForeignKey("employees.id"),
        nullable=False,
        index=True,
    )
    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    end_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    start_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )
    end_time: Mapped[time] = mapped_column(
        Time,
        nullable=False,
    )

    role: Mapped[Role] = relationship(
        Role,
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("end_date = start_date", name="valid_date_range"),
        CheckConstraint("start_time < end_time", name="valid_time_range"),
        Index("ix_shifts_employee_start_date", "employee_id", "start_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Shift(id={self.id}, employee_id={self.employee_id}, "
            f"{self.start_date} {self.start_time}-{self.end_time})>"
        )
