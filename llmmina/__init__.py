"""Protocol types, receipts, logs, configuration, runtime context and Solana helpers."""

__version__ = "0.1.0"