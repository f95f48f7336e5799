import uvicorn

from ruru_nft.core.config import settings
from ruru_nft.core.logger import logger

if __name__ == "__main__":
    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run("ruru_nft.main:app", host="0.0.0.0", port=settings.PORT)
