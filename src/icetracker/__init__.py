"""Ice penalty ledger and sync engine for a Sleeper fantasy league."""

__version__ = "0.1.0"
