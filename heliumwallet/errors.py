"""Error type raised by the wallet library."""


class WalletError(Exception):
    """Raised when a wallet operation cannot be completed."""