"""Initial database schema

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19

Creates the roles, employees, employee_roles and shifts tables, plus an
exclusion constraint that keeps one employee's shifts from overlapping.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create initial database schema."""

    # Create roles table
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_roles"),
    )

    # Create employees table
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_employees"),
    )

    # Create employee/role link table
    op.create_table(
        "employee_roles",
        sa.Column("employee_id", sa.Integer, nullable=False),
        sa.Column("role_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("employee_id", "role_id", name="pk_employee_roles"),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["employees.id"],
            name="fk_employee_roles_employee_id_employees",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["roles.id"],
            name="fk_employee_roles_role_id_roles",
            ondelete="CASCADE",
        ),
    )

    # Create shifts table
    op.create_table(
        "shifts",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("employee_id", sa.Integer, nullable=False),
        sa.Column("role_id", sa.Integer, nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("start_time", sa.Time, nullable=False),
        sa.Column("end_time", sa.Time, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_shifts"),
        sa.ForeignKeyConstraint(
            ["employee_id"], ["employees.id"], name="fk_shifts_employee_id_employees"
        ),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name="fk_shifts_role_id_roles"),
        sa.CheckConstraint("end_date = start_date", name="ck_shifts_valid_date_range"),
        sa.CheckConstraint("start_time < end_time", name="ck_shifts_valid_time_range"),
    )
    op.create_index("ix_shifts_employee_id", "shifts", ["employee_id"])
    op.create_index("ix_shifts_role_id", "shifts", ["role_id"])
    op.create_index("ix_shifts_employee_start_date", "shifts", ["employee_id", "start_date"])

    # Two shifts of one employee may not share any instant of
    # [start_date + start_time, start_date + end_time)
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute(
        """
        ALTER TABLE shifts
        ADD CONSTRAINT ex_shifts_employee_no_overlap
        EXCLUDE USING gist (
            employee_id WITH =,
            tsrange(start_date + start_time, start_date + end_time, '[)') WITH &&
        )
        """
    )


def downgrade() -> None:
    """Drop all tables."""
    op.execute("ALTER TABLE shifts DROP CONSTRAINT IF EXISTS ex_shifts_employee_no_overlap")
    op.drop_index("ix_shifts_employee_start_date", table_name="shifts")
    op.drop_index("ix_shifts_role_id", table_name="shifts")
    op.drop_index("ix_shifts_employee_id", table_name="shifts")
    op.drop_table("shifts")
    op.drop_table("employee_roles")
    op.drop_table("employees")
    op.drop_table("roles")
