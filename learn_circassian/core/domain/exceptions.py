# learn_circassian/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Store Errors ---

class StoreUnavailableError(DomainError):
    """Raised when the store file is missing or cannot be opened read-only."""
    def __init__(self, path: str, reason: str = "store file is missing"):
        self.path = path
        super().__init__(f"Dictionary store at '{path}' is unavailable: {reason}.")

class DataIntegrityError(DomainError):
    """
    Raised when a stored word record is malformed, e.g. an entry points at a
    dictionary id with no metadata row. Never expected against a well-formed store.
    """
    def __init__(self, word: str, detail: str):
        self.word = word
        self.detail = detail
        super().__init__(f"Malformed store record for '{word}': {detail}")

# --- Asset Fetch Errors ---

class FetchError(DomainError):
    """Base class for failures while downloading the store file."""

class NetworkError(FetchError):
    """Raised on connection-level failures (refused, reset, stalled)."""
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Network error while fetching '{url}': {reason}")

class TooManyRedirectsError(FetchError):
    """Raised when the redirect chain exceeds the hop limit."""
    def __init__(self, url: str, limit: int):
        self.url = url
        self.limit = limit
        super().__init__(f"Too many redirects (more than {limit}) while fetching '{url}'")

class SetupInProgressError(DomainError):
    """Raised when a second store download is requested while one is running."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"A download of the dictionary store to '{path}' is already in progress.")

class HttpStatusError(FetchError):
    """Raised on a non-success, non-redirect HTTP response."""
    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        suffix = f" {reason}" if reason else ""
        super().__init__(f"HTTP {status_code}{suffix} while fetching '{url}'")
