"""Domain modules - Business logic organized by bounded contexts.

Note: Domain modules are imported lazily to avoid circular imports.
Import them directly where needed:

    from app.domains.staff.models import Employee, Role, Shift
    from app.domains.staff.repository import EmployeeRepository
    from app.domains.shared.query_engine import DynamicQueryEngine
"""
