"""
Domain models for NFT records and their pinned metadata.

Responsibilities:
- Describe the persisted NFT record
- Build the metadata document pinned next to the image
- Strip record store internals from documents before they leave the API
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

PLATFORM_NAME = "Ruru NFT"
IMAGE_MIME_TYPE = "image/png"

# Fields owned by the record store that are never exposed to clients
STORE_INTERNAL_FIELDS = frozenset({"$collectionId", "$databaseId", "$permissions"})


class NFTRecord(BaseModel):
    """An NFT as persisted in the record store."""

    publicKey: str
    title: str
    symbol: str
    description: str
    image: str = Field(..., description="Gateway URL of the pinned image")
    author: str
    royalty: float
    price: float
    tags: Any
    mintAddress: Optional[str] = None
    metaData: str = Field(..., description="Gateway URL of the pinned metadata document")
    currentOwner: Optional[str] = None

    def finalize(self, mint_address: str, current_owner: Optional[str]) -> "NFTRecord":
        """Return a copy carrying the mint-time ownership fields."""
        return self.model_copy(
            update={"mintAddress": mint_address, "currentOwner": current_owner}
        )


class MetadataAttribute(BaseModel):
    trait_type: str
    value: Any


class MetadataFile(BaseModel):
    uri: str
    type: str = IMAGE_MIME_TYPE


class MetadataProperties(BaseModel):
    files: List[MetadataFile]
    category: str = "image"


class NFTMetadataDocument(BaseModel):
    """Metadata JSON pinned to IPFS for wallets and marketplaces."""

    name: str
    symbol: str
    description: str
    image: str
    attributes: List[MetadataAttribute]
    properties: MetadataProperties

    @classmethod
    def build(
        cls,
        title: str,
        symbol: str,
        description: str,
        image_url: str,
        author: str,
        royalty: float,
        price: float,
    ) -> "NFTMetadataDocument":
        return cls(
            name=title,
            symbol=symbol,
            description=description,
            image=image_url,
            attributes=[
                MetadataAttribute(trait_type="Author", value=author),
                MetadataAttribute(trait_type="Royalty", value=royalty),
                MetadataAttribute(trait_type="Price", value=price),
                MetadataAttribute(trait_type="Platform", value=PLATFORM_NAME),
            ],
            properties=MetadataProperties(files=[MetadataFile(uri=image_url)]),
        )


def redact_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Drop store-internal fields; everything else passes through unchanged."""
    return {key: value for key, value in document.items() if key not in STORE_INTERNAL_FIELDS}


def redact_documents(documents: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [redact_document(document) for document in documents]
