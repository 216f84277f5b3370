class CouplerError(Exception):
    """Base exception for Coupler"""
    pass

class AlreadyConsumedError(CouplerError):
    """Raised when the async sequence of a coupler is requested twice"""
    pass

class AlreadyDisposedError(CouplerError):
    """Raised when observers are registered on a disposed coupler"""
    pass


__all__ = [
    'CouplerError',
    'AlreadyConsumedError',
    'AlreadyDisposedError',
]
