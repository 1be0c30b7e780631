"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_documents (Alembic Migration)

Responsibilities:
  - Crear el esquema base: directorio de usuarios + documentos.
  - Guardar las listas de rol como arrays uuid[] embebidos en documents.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/* (usa este esquema como contrato)

Policy:
  - Migración BASELINE.
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>, fk_<tabla>_<col>__<ref_tabla>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_documents"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # 1) IDENTITY (users): lo escribe otro servicio, acá solo se lee
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.execute("CREATE INDEX ix_users_lower_email ON users (lower(email))")

    # =========================================================
    # 2) DOCUMENTS (+ roles embebidos)
    # =========================================================
    op.create_table(
        "documents",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "description",
            sa.Text,
            nullable=False,
            server_default=sa.text("''"),
        ),
        sa.Column("owner_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "read_only_user_ids",
            postgresql.ARRAY(postgresql.UUID(as_uuid=True)),
            nullable=False,
            server_default=sa.text("'{}'::uuid[]"),
        ),
        sa.Column(
            "read_write_user_ids",
            postgresql.ARRAY(postgresql.UUID(as_uuid=True)),
            nullable=False,
            server_default=sa.text("'{}'::uuid[]"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_documents"),
        sa.ForeignKeyConstraint(
            ["owner_user_id"],
            ["users.id"],
            name="fk_documents_owner_user_id__users",
        ),
    )

    op.create_index("ix_documents_owner_user_id", "documents", ["owner_user_id"])
    op.create_index("ix_documents_created_at", "documents", ["created_at"])
    # Lookup por membresía (operador @>)
    op.execute(
        "CREATE INDEX ix_documents_read_only_user_ids "
        "ON documents USING gin (read_only_user_ids)"
    )
    op.execute(
        "CREATE INDEX ix_documents_read_write_user_ids "
        "ON documents USING gin (read_write_user_ids)"
    )


def downgrade() -> None:
    op.drop_table("documents")
    op.drop_table("users")
