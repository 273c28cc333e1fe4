"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod
from collections.abc import Callable

BytesSentCallback = Callable[[int], None]


class ImageStorageRepository(ABC):
    """Contract for storing, addressing and removing image objects.

    Implementations could be S3, GCS, local disk, etc.
    The pipeline depends on this interface, not the implementation.
    """

    @abstractmethod
    def write_image(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        on_bytes_sent: BytesSentCallback | None = None,
    ) -> None:
        """Stream image bytes to storage under `key`.

        Args:
            key: Object key to write
            file_data: Encoded image content
            mime_type: MIME type (e.g., 'image/jpeg')
            on_bytes_sent: Called with the number of bytes sent since the
                previous call, zero or more times while the write runs

        Raises:
            TransportError: If the write fails
        """

    @abstractmethod
    def get_download_url(self, *, key: str) -> str:
        """Mint the durable download URL of a stored object.

        Args:
            key: Object key from a successful write

        Returns:
            Public download URL

        Raises:
            UrlResolutionError: If the URL cannot be obtained
        """

    @abstractmethod
    def remove_image(self, *, key: str) -> None:
        """Delete an object by key.

        Args:
            key: Object key

        Raises:
            DeletionError: If deletion fails
        """
