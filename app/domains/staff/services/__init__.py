"""
ShiftManager - Staff Services
Employee, role and shift business logic
"""

from app.domains.staff.services.employee_service import EmployeeService
from app.domains.staff.services.role_service import RoleService
from app.domains.staff.services.shift_service import OVERLAP_MESSAGE, ShiftService

__all__ = [
    "OVERLAP_MESSAGE",
    "EmployeeService",
    "RoleService",
    "ShiftService",
]
