import logging

import uvicorn

from app.core.config import get_settings
from app.main import app

settings = get_settings()

# Setup basic logging so request and store errors reach the platform logs
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

logger.info("api/index.py initialized")

# Serverless platforms import the FastAPI app instance from here

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
