from .ledger import LedgerService, with_details

__all__ = ["LedgerService", "with_details"]
