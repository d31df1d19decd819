"""
FastAPI endpoints for the inventory app.
This runs alongside the Streamlit app in the same container and answers
the platform's health checks.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.responses import JSONResponse
import uvicorn

from constants.supply_types import MEDICAL_SUPPLIES_TABLE
from utils.supabase_handler import SupabaseError, SupabaseHandler

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Medical Supplies Inventory API",
    description="Health endpoints for the medical supplies inventory app",
    version="1.0.0"
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"message": "Medical Supplies Inventory API is running", "status": "healthy"}


@app.get("/api/health")
def health_check():
    """Detailed health check: configuration and backend reachability"""
    environment = {
        "supabase_url": bool(os.environ.get('SUPABASE_URL')),
        "supabase_anon_key": bool(os.environ.get('SUPABASE_ANON_KEY')),
    }
    try:
        handler = SupabaseHandler()
        handler.select_all(MEDICAL_SUPPLIES_TABLE)
    except ValueError as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": str(e), "environment": environment}
        )
    except SupabaseError as e:
        logger.error(f"Health check failed: {e.message}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "error": e.message, "environment": environment}
        )

    return {
        "status": "healthy",
        "environment": environment,
        "endpoints": {
            "health": "/api/health"
        }
    }


if __name__ == "__main__":
    # This allows running the API standalone for testing
    uvicorn.run(app, host="0.0.0.0", port=8001)
