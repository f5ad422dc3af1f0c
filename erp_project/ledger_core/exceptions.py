class LedgerError(Exception):
    """Base class for errors raised by the posting workflows."""
    pass


class AuthenticationError(LedgerError):
    """Raised when the acting user cannot write to the company's books."""
    pass


class NotFoundError(LedgerError):
    """Raised when the source document vanished before the payment applied."""
    pass


class TransactionConflictError(LedgerError):
    """Raised when concurrent writes kept aborting the payment transaction."""
    pass
