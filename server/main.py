from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from server.api import layout
from core.utils.config import settings
import time
import logging

# Configure Logging
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger("hub")

app = FastAPI(title="CardPacker Hub", version="1.0.0")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Logging Middleware, one line per request
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000
    logger.info(f"{request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.2f}ms")
    return response

# Include the Layout API
app.include_router(layout.router)

@app.get("/")
async def root():
    return {"status": "online", "message": "CardPacker Hub is active"}
