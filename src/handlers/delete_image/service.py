"""Business logic for image deletion.

Deletion is best-effort cleanup that accompanies a catalog record
update or removal. Storage failures never surface here; only a URL that
cannot address an object is reported.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.pipeline.image_pipeline import ImagePipeline
from core.utils.storage_urls import get_file_name_from_url, is_storage_url
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting stored images.

    Only URLs served by this backend are handed to the deleter; images
    hosted elsewhere are left alone.
    """

    def __init__(self, pipeline: ImagePipeline | None = None) -> None:
        """Initialize the delete service with its pipeline."""
        self.pipeline = pipeline or ImagePipeline()

    def delete_image(self, image_url: str) -> dict[str, Any]:
        """Delete the image behind `image_url`.

        Returns:
            A dictionary describing what was done

        Raises:
            InvalidUrlError: If a backend URL carries no object key
        """
        logger.debug("Starting image deletion", extra={"image_url": image_url})

        if not is_storage_url(image_url):
            logger.info("Image is not hosted by this backend", extra={"image_url": image_url})
            deleted = False
        else:
            self.pipeline.delete_image(image_url)
            deleted = True

        return {
            "image_url": image_url,
            "file_name": get_file_name_from_url(image_url),
            "deleted": deleted,
            "processed_at": utc_now_iso(),
        }
