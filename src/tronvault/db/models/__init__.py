from tronvault.db.models.wallet import TokenTransferEvent, Wallet, WalletAddress

__all__ = [
    "TokenTransferEvent",
    "Wallet",
    "WalletAddress",
]
