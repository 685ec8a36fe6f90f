"""Domain-specific exceptions for ledger services."""

from apps.common.exceptions import InternalError


class LedgerWriteError(InternalError):
    """Raised when a ledger entry could not be persisted."""
    code = 'ledger_write_failed'
    default_message = 'Failed to record ledger entry'
