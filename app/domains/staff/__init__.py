"""Staff domain module.

This module contains employees, the roles they can work and their shifts:
- Employee, Role and Shift models with the employee_roles link table
- Repositories and services for each entity
- Shift overlap detection

Note: Use direct imports to avoid circular dependencies:

    from app.domains.staff.models import Employee, Role, Shift
    from app.domains.staff.services import ShiftService
"""
