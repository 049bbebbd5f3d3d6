import uuid
from typing import Optional

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tronvault.db.session import Base, TimestampMixin, UUIDPrimaryKey


class Wallet(UUIDPrimaryKey, TimestampMixin, Base):
    """A custodial wallet: one main address, any number of deposit sub-addresses."""

    __tablename__ = "wallets"

    address: Mapped[str] = mapped_column(String(64), unique=True)
    label: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    transfer_webhook: Mapped[Optional[str]] = mapped_column(String(2048), default=None)

    addresses: Mapped[list["WalletAddress"]] = relationship(
        back_populates="wallet", lazy="selectin", cascade="all, delete-orphan",
    )
    token_transfer_events: Mapped[list["TokenTransferEvent"]] = relationship(
        back_populates="wallet", lazy="selectin", cascade="all, delete-orphan",
    )


class WalletAddress(UUIDPrimaryKey, TimestampMixin, Base):
    """A sub-address generated for a wallet."""

    __tablename__ = "wallet_addresses"

    wallet_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("wallets.id"), index=True)
    address: Mapped[str] = mapped_column(String(64), unique=True)

    wallet: Mapped[Wallet] = relationship(back_populates="addresses")


class TokenTransferEvent(UUIDPrimaryKey, TimestampMixin, Base):
    """Webhook for incoming transfers of one TRC20 contract."""

    __tablename__ = "token_transfer_events"
    __table_args__ = (UniqueConstraint("wallet_id", "contract"),)

    wallet_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("wallets.id"), index=True)
    contract: Mapped[str] = mapped_column(String(64))
    webhook: Mapped[str] = mapped_column(String(2048))

    wallet: Mapped[Wallet] = relationship(back_populates="token_transfer_events")
