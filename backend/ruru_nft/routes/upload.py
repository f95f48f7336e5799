"""
Handles NFT upload and mint finalisation.

Responsibilities:
- Accept the NFT form payload with a data URL image
- Pin the resized image and the metadata document to IPFS
- Return the locators plus an upload id for the follow-up /mint
- Persist the record once the client reports the on-chain mint address
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ruru_nft.core.dependencies import get_pipeline_manager
from ruru_nft.core.exceptions import RelayError, UploadError
from ruru_nft.core.logger import logger
from ruru_nft.models.request_models import MintRequest, UploadRequest
from ruru_nft.models.response_models import MintResponse, UploadResponse
from ruru_nft.services.pipeline_manager import PipelineManager

router = APIRouter(tags=["Upload"])


@router.post("/upload", response_model=UploadResponse, status_code=201)
def upload_nft(
    request: Optional[UploadRequest] = None,
    pipeline: PipelineManager = Depends(get_pipeline_manager),
):
    """
    Pins the image and metadata. Nothing is persisted until /mint.
    """
    if request is None:
        request = UploadRequest()

    try:
        entry = pipeline.upload(request)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error uploading data: {str(e)}")
        raise UploadError("Error uploading data", str(e)) from e

    return UploadResponse(
        message="NFT uploaded and minted successfully",
        metadataUrl=entry.metadata_url,
        imageUrl=entry.image_url,
        uploadId=entry.upload_id,
    )


@router.post("/mint", response_model=MintResponse, status_code=201)
def mint_nft(
    request: Optional[MintRequest] = None,
    pipeline: PipelineManager = Depends(get_pipeline_manager),
):
    """
    Records the mint address and owner against a pending upload.
    """
    if request is None:
        request = MintRequest()

    try:
        entry, _ = pipeline.mint(request)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error uploading data: {str(e)}")
        raise UploadError("Error uploading data", str(e)) from e

    return MintResponse(
        message="NFT Successfully Created, Uploaded And Now Is Live",
        metadataUrl=entry.metadata_url,
        imageUrl=entry.image_url,
    )
