"""Create reports table.

Revision ID: a3c5e7f9b1d2
Revises:
Create Date: 2026-04-20
"""

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a3c5e7f9b1d2"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    # Create the table (idempotent)
    op.execute("""
        CREATE TABLE IF NOT EXISTS reports (
            id SERIAL PRIMARY KEY,
            lat DOUBLE PRECISION NOT NULL,
            lng DOUBLE PRECISION NOT NULL,
            intensity SMALLINT NOT NULL,
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            expires_at TIMESTAMPTZ NOT NULL DEFAULT now() + INTERVAL '24 hours',
            CONSTRAINT ck_reports_intensity_range CHECK (intensity BETWEEN 1 AND 5)
        );
    """)

    # Create indexes (idempotent)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_reports_created_at
            ON reports (created_at);
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS ix_reports_expires_at
            ON reports (expires_at);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS reports;")
