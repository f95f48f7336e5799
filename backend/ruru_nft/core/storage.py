"""
Pinata (IPFS) helper functions for content uploads.

Handles all interactions with the content-addressed pinning service:
- pinFileToIPFS: resized NFT images
- pinJSONToIPFS: NFT metadata documents

Each upload returns a gateway locator derived from the IPFS hash.
"""

import io
import json
from typing import Any, Dict, Optional

import requests

from ruru_nft.core.config import settings
from ruru_nft.core.exceptions import ContentStoreError
from ruru_nft.core.logger import logger


class StorageManager:
    """Handles pinning of files and JSON documents to IPFS through Pinata."""

    PIN_FILE_PATH = "/pinning/pinFileToIPFS"
    PIN_JSON_PATH = "/pinning/pinJSONToIPFS"

    def __init__(
        self,
        api_url: Optional[str] = None,
        gateway: Optional[str] = None,
        api_key: Optional[str] = None,
        secret_api_key: Optional[str] = None,
        jwt: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = (api_url or settings.PINATA_API_URL).rstrip("/")
        self.gateway = (gateway or settings.PINATA_GATEWAY).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.PINATA_API_KEY
        self.secret_api_key = (
            secret_api_key if secret_api_key is not None else settings.PINATA_SECRET_API_KEY
        )
        self.jwt = jwt if jwt is not None else settings.PINATA_JWT
        self.timeout = timeout or settings.PINATA_TIMEOUT
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        """Auth headers: a JWT wins over the legacy key/secret pair."""
        if self.jwt:
            return {"Authorization": f"Bearer {self.jwt}"}
        return {
            "pinata_api_key": self.api_key,
            "pinata_secret_api_key": self.secret_api_key,
        }

    def _get_public_url(self, ipfs_hash: str) -> str:
        return f"{self.gateway}/{ipfs_hash}"

    def _pin(self, path: str, **kwargs) -> str:
        """
        POST to a pinning endpoint and turn the returned hash into a locator.

        Raises:
            ContentStoreError: If the request fails or no hash comes back
        """
        url = f"{self.api_url}{path}"
        try:
            response = self.session.post(
                url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"Pinata request to {path} failed: {str(e)}")
            raise ContentStoreError("Error pinning content", str(e)) from e

        if not response.ok:
            logger.error(f"Pinata returned {response.status_code} for {path}: {response.text}")
            raise ContentStoreError(
                "Error pinning content",
                f"Pinata returned {response.status_code}: {response.text}",
            )

        try:
            ipfs_hash = response.json()["IpfsHash"]
        except (ValueError, KeyError) as e:
            raise ContentStoreError(
                "Error pinning content", f"Unexpected Pinata response: {response.text}"
            ) from e

        return self._get_public_url(ipfs_hash)

    def pin_bytes(
        self,
        data: bytes,
        name: str,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Pin a byte buffer to IPFS.

        Args:
            data: File contents
            name: Name recorded in the Pinata pin metadata
            content_type: MIME type of the file

        Returns:
            Gateway URL of the pinned file
        """
        locator = self._pin(
            self.PIN_FILE_PATH,
            files={"file": (name, io.BytesIO(data), content_type)},
            data={"pinataMetadata": json.dumps({"name": name})},
        )
        logger.info(f"Pinned file {name} to {locator}")
        return locator

    def pin_json(self, document: Dict[str, Any]) -> str:
        """
        Pin a JSON document to IPFS.

        Returns:
            Gateway URL of the pinned document
        """
        locator = self._pin(self.PIN_JSON_PATH, json=document)
        logger.info(f"Pinned JSON document to {locator}")
        return locator
