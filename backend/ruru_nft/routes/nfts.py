"""
Query endpoints over persisted NFT records.

Provides functionality to:
- List every NFT
- Fetch a single NFT by id
- List the NFTs created by one public key
- Transfer an NFT to a new owner

Store-internal fields are stripped from every returned document.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ruru_nft.core.database import DatabaseManager
from ruru_nft.core.dependencies import get_database
from ruru_nft.core.exceptions import RelayError, UpstreamError, ValidationError
from ruru_nft.core.logger import logger
from ruru_nft.models.nft_models import redact_document, redact_documents
from ruru_nft.models.request_models import (
    FetchSingleRequest,
    FindMyNFTsRequest,
    UpdateNFTRequest,
)
from ruru_nft.models.response_models import NFTListResponse, NFTResponse

router = APIRouter(tags=["NFTs"])


@router.get("/fetchAll", response_model=NFTListResponse)
def fetch_all(database: DatabaseManager = Depends(get_database)):
    """
    Get every NFT in the collection. An empty collection is a 404.
    """
    try:
        result = database.list_nfts()
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error fetching NFTs: {str(e)}")
        raise UpstreamError("Error fetching NFTs", str(e)) from e

    if result["total"] == 0:
        return JSONResponse(status_code=404, content={"message": "No NFTs found"})

    return NFTListResponse(
        message="NFTs fetched successfully",
        data=redact_documents(result["documents"]),
    )


@router.post("/fetchSingle", response_model=NFTResponse)
def fetch_single(
    request: Optional[FetchSingleRequest] = None,
    database: DatabaseManager = Depends(get_database),
):
    """Get one NFT by id."""
    if request is None:
        request = FetchSingleRequest()

    if not request.id:
        raise ValidationError("Undefined NFT")

    try:
        document = database.get_nft(request.id)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error fetching NFT {request.id}: {str(e)}")
        raise UpstreamError("Error fetching NFT", str(e)) from e

    return NFTResponse(message="NFT fetched successfully", data=redact_document(document))


@router.post("/updateNFT", response_model=NFTResponse)
def update_nft(
    request: Optional[UpdateNFTRequest] = None,
    database: DatabaseManager = Depends(get_database),
):
    """Set currentOwner on an existing NFT."""
    if request is None:
        request = UpdateNFTRequest()

    if not request.id or not request.newOwner:
        raise ValidationError("NFT ID and new owner are required!")

    try:
        document = database.update_nft(request.id, {"currentOwner": request.newOwner})
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error updating NFT owner for {request.id}: {str(e)}")
        raise UpstreamError("Error updating NFT owner", str(e)) from e

    return NFTResponse(message="NFT owner updated successfully", data=redact_document(document))


@router.post("/findMyNFTs", response_model=NFTListResponse, response_model_exclude_none=True)
def find_my_nfts(
    request: Optional[FindMyNFTsRequest] = None,
    database: DatabaseManager = Depends(get_database),
):
    """
    List the NFTs uploaded by a public key.

    Unlike /fetchAll, no matches is a 200 with message "Empty".
    """
    if request is None:
        request = FindMyNFTsRequest()

    if not request.publicKey:
        raise ValidationError("Public Key is required!")

    try:
        result = database.list_nfts(public_key=request.publicKey)
    except RelayError:
        raise
    except Exception as e:
        logger.error(f"Error fetching NFTs by public key: {str(e)}")
        raise UpstreamError("Error fetching NFTs by public key", str(e)) from e

    if result["total"] == 0:
        return NFTListResponse(message="Empty")

    return NFTListResponse(
        message="NFTs fetched successfully",
        data=redact_documents(result["documents"]),
    )
