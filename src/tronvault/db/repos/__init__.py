from tronvault.db.repos.wallet_repo import WalletRepo
from tronvault.db.repos.wallet_store import SqlWalletStore

__all__ = ["SqlWalletStore", "WalletRepo"]
