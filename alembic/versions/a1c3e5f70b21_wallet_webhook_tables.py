"""wallet_webhook_tables

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-10-17 09:12:44.105318

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1c3e5f70b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "wallets",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("address", sa.String(64), nullable=False),
        sa.Column("label", sa.String(255), nullable=True),
        sa.Column("transfer_webhook", sa.String(2048), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_wallets")),
        sa.UniqueConstraint("address", name=op.f("uq_wallets_address")),
    )

    op.create_table(
        "wallet_addresses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("wallet_id", sa.Uuid(), sa.ForeignKey("wallets.id", name=op.f("fk_wallet_addresses_wallet_id_wallets")), nullable=False),
        sa.Column("address", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_wallet_addresses")),
        sa.UniqueConstraint("address", name=op.f("uq_wallet_addresses_address")),
    )
    op.create_index(op.f("ix_wallet_addresses_wallet_id"), "wallet_addresses", ["wallet_id"])

    op.create_table(
        "token_transfer_events",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("wallet_id", sa.Uuid(), sa.ForeignKey("wallets.id", name=op.f("fk_token_transfer_events_wallet_id_wallets")), nullable=False),
        sa.Column("contract", sa.String(64), nullable=False),
        sa.Column("webhook", sa.String(2048), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_token_transfer_events")),
        sa.UniqueConstraint("wallet_id", "contract", name=op.f("uq_token_transfer_events_wallet_id")),
    )
    op.create_index(op.f("ix_token_transfer_events_wallet_id"), "token_transfer_events", ["wallet_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_token_transfer_events_wallet_id"), table_name="token_transfer_events")
    op.drop_table("token_transfer_events")
    op.drop_index(op.f("ix_wallet_addresses_wallet_id"), table_name="wallet_addresses")
    op.drop_table("wallet_addresses")
    op.drop_table("wallets")
