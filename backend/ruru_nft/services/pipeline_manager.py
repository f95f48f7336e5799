"""
Orchestrator for the NFT upload and mint pipeline.

Responsibilities:
- Validate upload payloads before any network call
- Transcode and pin the image, then compose and pin the metadata document
- Hold the assembled record until the matching /mint call
- Merge mint-time ownership fields and persist the record
"""

import math
import re
import uuid
from typing import Any, Dict, Optional, Tuple

from ruru_nft.core.database import DatabaseManager
from ruru_nft.core.exceptions import (
    NotFoundError,
    RelayError,
    UploadError,
    ValidationError,
)
from ruru_nft.core.logger import logger
from ruru_nft.core.storage import StorageManager
from ruru_nft.models.nft_models import NFTMetadataDocument, NFTRecord
from ruru_nft.models.request_models import MintRequest, UploadRequest
from ruru_nft.services.media_transcoder import MediaTranscoder
from ruru_nft.services.pending_uploads import PendingUpload, PendingUploadRegistry

UPLOAD_FIELDS = (
    "publicKey",
    "title",
    "symbol",
    "description",
    "image",
    "author",
    "royalty",
    "price",
    "tags",
)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(value: Any) -> Optional[float]:
    """
    Parse the leading decimal number of a value ("7.5 SOL" -> 7.5).

    Returns None when there is no finite number to read.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        number = float(match.group(0))
    return number if math.isfinite(number) else None


def _is_blank(value: Any) -> bool:
    """None, False, empty string and zero count as missing; an empty tag list does not."""
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and value == 0


def _details(error: Exception) -> str:
    if isinstance(error, RelayError) and error.details:
        return error.details
    return str(error)


class PipelineManager:
    """Runs the two-phase upload pipeline and the mint finalisation."""

    def __init__(
        self,
        storage: StorageManager,
        database: DatabaseManager,
        pending: PendingUploadRegistry,
        transcoder: Optional[MediaTranscoder] = None,
    ):
        self.storage = storage
        self.database = database
        self.pending = pending
        self.transcoder = transcoder or MediaTranscoder()

    @staticmethod
    def validate_upload(request: UploadRequest) -> Tuple[float, float]:
        """
        Check that every field is present and that royalty and price are numbers.

        Returns:
            (royalty, price) as floats
        """
        missing = [name for name in UPLOAD_FIELDS if _is_blank(getattr(request, name))]
        if missing:
            logger.info(f"Upload rejected, missing fields: {missing}")
            raise ValidationError("All fields are required!")

        royalty = parse_number(request.royalty)
        price = parse_number(request.price)
        if royalty is None or price is None:
            raise ValidationError("Royalty and price must be valid numbers!")

        return royalty, price

    def store_image(self, data_url: str) -> str:
        """Resize the data URL image and pin it; returns the image locator."""
        image_bytes = self.transcoder.transcode(data_url)
        file_name = f"nft_img_{uuid.uuid4()}.png"
        return self.storage.pin_bytes(image_bytes, file_name, content_type="image/png")

    def store_metadata(self, metadata: NFTMetadataDocument) -> str:
        return self.storage.pin_json(metadata.model_dump())

    def upload(self, request: UploadRequest) -> PendingUpload:
        """
        Pin the image and its metadata and park the assembled record.

        Raises:
            ValidationError: Missing fields or bad numbers
            UploadError: A non data-URL image, or any transcoding or pinning failure
        """
        royalty, price = self.validate_upload(request)

        image_url = None
        try:
            image_url = self.store_image(request.image)

            metadata = NFTMetadataDocument.build(
                title=request.title,
                symbol=request.symbol,
                description=request.description,
                image_url=image_url,
                author=request.author,
                royalty=royalty,
                price=price,
            )
            metadata_url = self.store_metadata(metadata)
        except Exception as e:
            if image_url:
                logger.warning(f"Metadata pin failed, image left orphaned at {image_url}")
            logger.error(f"Error uploading data: {_details(e)}")
            raise UploadError("Error uploading data", _details(e)) from e

        record = NFTRecord(
            publicKey=request.publicKey,
            title=request.title,
            symbol=request.symbol,
            description=request.description,
            image=image_url,
            author=request.author,
            royalty=royalty,
            price=price,
            tags=request.tags,
            metaData=metadata_url,
        )
        entry = self.pending.add(record, image_url, metadata_url)
        logger.info(f"Upload {entry.upload_id} pinned for {request.publicKey}")
        return entry

    def mint(self, request: MintRequest) -> Tuple[PendingUpload, Dict[str, Any]]:
        """
        Attach the mint address and owner to a pending upload and persist it.

        Returns:
            The consumed pending entry and the created document
        """
        if not request.mintAddress:
            raise ValidationError("Mint Address Not Found")
        if not request.uploadId:
            raise ValidationError("Upload ID is required!")

        entry = self.pending.pop(request.uploadId)
        if entry is None:
            raise NotFoundError(
                "Pending upload not found",
                f"No pending upload with id {request.uploadId}; it may have expired",
            )

        record = entry.record.finalize(request.mintAddress, request.currentOwner)
        try:
            document = self.database.create_nft(record.model_dump())
        except Exception as e:
            self.pending.restore(entry)
            logger.error(f"Error persisting upload {entry.upload_id}: {_details(e)}")
            raise UploadError("Error uploading data", _details(e)) from e

        logger.info(f"Minted {request.mintAddress} from upload {entry.upload_id}")
        return entry, document
