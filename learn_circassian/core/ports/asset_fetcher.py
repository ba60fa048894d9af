# learn_circassian\core\ports\asset_fetcher.py
from typing import AsyncIterator, Protocol


class IAssetFetcher(Protocol):
    """
    Port for downloading one large remote file to a local path.
    """

    def fetch(self, url: str, destination: str) -> AsyncIterator[float]:
        """
        Streams `url` into `destination`.

        Yields:
            Progress fractions in [0, 1], only when the total size is known.

        Raises:
            NetworkError: On connection-level failures.
            TooManyRedirectsError: If the redirect chain is too long.
            HttpStatusError: On a non-success, non-redirect response.

        On any failure `destination` is left untouched and no partial file remains.
        """
        ...
