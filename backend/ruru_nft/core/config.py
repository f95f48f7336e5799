"""
Application configuration settings.

Responsibilities:
- Load environment variables (from the process or a local .env file)
- Configure the Pinata pinning and Supabase record store credentials
- Configure API settings (port, CORS, log level, pending upload lifetime)
"""

import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Ruru NFT")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list = os.getenv("CORS_ORIGINS", "*").split(",")

    # Record store
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    NFT_TABLE: str = os.getenv("NFT_TABLE", "nfts")

    # Content store
    PINATA_API_KEY: str = os.getenv("PINATA_API_KEY", "")
    PINATA_SECRET_API_KEY: str = os.getenv("PINATA_SECRET_API_KEY", "")
    PINATA_JWT: str = os.getenv("PINATA_JWT", "")
    PINATA_API_URL: str = os.getenv("PINATA_API_URL", "https://api.pinata.cloud")
    PINATA_GATEWAY: str = os.getenv("PINATA_GATEWAY", "https://gateway.pinata.cloud/ipfs")
    PINATA_TIMEOUT: float = float(os.getenv("PINATA_TIMEOUT", "60"))

    # Seconds an upload waits for its /mint call before it is discarded
    PENDING_UPLOAD_TTL: float = float(os.getenv("PENDING_UPLOAD_TTL", "900"))


settings = Settings()
