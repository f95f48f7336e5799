"""
Pydantic models for API request validation.

Responsibilities:
- Define schemas for incoming JSON payloads
- Leave every field optional so the routes can answer missing input
  with their own 400 messages
- Accept numbers where strings are expected (ids, wallet keys, titles)
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class RelayRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


class UploadRequest(RelayRequest):
    publicKey: Optional[str] = None
    title: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    author: Optional[str] = None
    royalty: Optional[Any] = None
    price: Optional[Any] = None
    tags: Optional[Any] = None


class MintRequest(RelayRequest):
    mintAddress: Optional[str] = None
    currentOwner: Optional[str] = None
    uploadId: Optional[str] = None


class FetchSingleRequest(RelayRequest):
    id: Optional[str] = None


class UpdateNFTRequest(RelayRequest):
    id: Optional[str] = None
    newOwner: Optional[str] = None


class FindMyNFTsRequest(RelayRequest):
    publicKey: Optional[str] = None
