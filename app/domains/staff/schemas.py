"""Pydantic schemas for the Staff domain."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domains.staff.models import Shift


# ============ Role Schemas ============


class RoleBase(BaseModel):
    """Base schema for Role."""

    name: str = Field(..., min_length=1, max_length=100)


class RoleCreate(RoleBase):
    """Schema for creating a Role."""


class RoleUpdate(RoleBase):
    """Schema for renaming a Role."""


class RoleResponse(RoleBase):
    """Schema for Role response."""

    model_config = ConfigDict(from_attributes=True)

    id: int


# ============ Employee Schemas ============


class EmployeeBase(BaseModel):
    """Base schema for Employee."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class EmployeeCreate(EmployeeBase):
    """Schema for creating an Employee.

    Role ids that do not exist are ignored.
    """

    role_ids: list[int] = Field(default_factory=list)


class EmployeeUpdate(BaseModel):
    """Schema for updating an Employee's name."""

    first_name: str | None = Field(None, min_length=1, max_length=50)
    last_name: str | None = Field(None, min_length=1, max_length=50)


class EmployeeSummary(EmployeeBase):
    """Minimal employee representation for pickers."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class EmployeeResponse(EmployeeSummary):
    """Schema for Employee response."""

    roles: list[RoleResponse] = Field(default_factory=list)



# ============ Shift Schemas ============


class ShiftTimes(BaseModel):
    """Date and time range of a shift."""

    start_date: date
    end_date: date
    start_time: time
    end_time: time

    @model_validator(mode="after")
    def validate_range(self) -> "ShiftTimes":
        """Reject empty or inverted ranges.

        Shifts lie within a single day, so ``end_date`` must equal
        ``start_date``; overnight work is booked as two shifts.
        """
        if self.end_date != self.start_date:
            raise ValueError("end_date must equal start_date")
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class ShiftCreate(ShiftTimes):
    """Schema for creating a Shift."""

    employee_id: int
    role_id: int


class ShiftUpdate(ShiftTimes):
    """Schema for rescheduling a Shift. The employee cannot change."""

    role_id: int


class ShiftResponse(BaseModel):
    """Schema for Shift response."""

    id: int
    employee_id: int
    role_id: int
    role: str | None = None
    start_date: date
    end_date: date
    start_time: time
    end_time: time

    @classmethod
    def from_shift(cls, shift: Shift, role_name: str | None = None) -> "ShiftResponse":
        """Build a response, taking the role name from ``shift.role`` unless given."""
        if role_name is None and shift.role is not None:
            role_name = shift.role.name
        return cls(
            id=shift.id,
            employee_id=shift.employee_id,
            role_id=shift.role_id,
            role=role_name,
            start_date=shift.start_date,
            end_date=shift.end_date,
            start_time=shift.start_time,
            end_time=shift.end_time,
        )


class EmployeeShiftsResponse(EmployeeBase):
    """An employee together with their shifts for a period."""

    id: int
    shifts: list[ShiftResponse] = Field(default_factory=list)
