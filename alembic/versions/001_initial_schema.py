"""Initial schema - number sequences, templates, signers, documents, rosters.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Rows are seeded out-of-band; current_value only ever grows.
    op.create_table(
        "number_sequence",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("prefix", sa.String(32), nullable=False, server_default=""),
        sa.Column("padding", sa.SmallInteger(), nullable=False, server_default="4"),
        sa.Column("current_value", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("padding >= 0", name="ck_number_sequence_padding"),
        sa.CheckConstraint("current_value >= 0", name="ck_number_sequence_current_value"),
    )
    op.create_index("ix_number_sequence_code", "number_sequence", ["code"], unique=True)

    op.create_table(
        "template",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("body", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_template_code", "template", ["code"], unique=True)

    op.create_table(
        "signer",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_signer_code", "signer", ["code"], unique=True)

    op.create_table(
        "document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("template_id", sa.UUID(), sa.ForeignKey("template.id"), nullable=False),
        sa.Column("sequence_id", sa.UUID(), sa.ForeignKey("number_sequence.id"), nullable=False),
        sa.Column("number", sa.String(128), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("payload", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('draft', 'issued', 'signed', 'archived')",
            name="ck_document_status",
        ),
    )
    op.create_index("ix_document_sequence_number", "document", ["sequence_id", "number"], unique=True)
    op.create_index("ix_document_status_created", "document", ["status", "created_at"])

    op.create_table(
        "document_signer",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("document_id", sa.UUID(), sa.ForeignKey("document.id", ondelete="CASCADE"), nullable=False),
        sa.Column("signer_id", sa.UUID(), sa.ForeignKey("signer.id"), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("order_no", sa.Integer(), nullable=False),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('pending', 'signed', 'declined')",
            name="ck_document_signer_status",
        ),
        sa.CheckConstraint("order_no >= 1", name="ck_document_signer_order_no"),
    )
    op.create_index(
        "ix_document_signer_document_signer", "document_signer", ["document_id", "signer_id"], unique=True
    )
    op.create_index(
        "ix_document_signer_document_order", "document_signer", ["document_id", "order_no"], unique=True
    )


def downgrade() -> None:
    op.drop_table("document_signer")
    op.drop_table("document")
    op.drop_table("signer")
    op.drop_table("template")
    op.drop_table("number_sequence")
