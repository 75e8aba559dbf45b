import uuid
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional
import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, UploadFile, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

import config
from document import EmptyJoinError, InvalidDocumentError, InvalidRangeError
from merger import join_pdfs
from splitter import split_pdf

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    task = asyncio.create_task(periodic_cleanup())
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass

app = FastAPI(title="PDF Join/Split API", version="1.0.0", lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory storage for finished documents
result_store: Dict[str, Dict] = {}


def check_pdf_filename(upload: UploadFile):
    if not upload.filename or not upload.filename.lower().endswith('.pdf'):
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")


def store_result(data: bytes, filename: str) -> Dict:
    """Keep output bytes until downloaded or expired and describe them to the client."""
    file_id = str(uuid.uuid4())
    result_store[file_id] = {
        "data": data,
        "filename": filename.format(file_id=file_id),
        "created_at": datetime.now(),
        "downloaded": False,
    }
    return {
        "file_id": file_id,
        "download_url": f"/download/{file_id}",
        "expires_in_minutes": config.RESULT_TTL_MINUTES,
    }


def is_expired(file_info: Dict, now: datetime) -> bool:
    if file_info.get("downloaded"):
        download_time = file_info.get("downloaded_at")
        return bool(download_time and now - download_time > timedelta(minutes=config.DOWNLOAD_TTL_MINUTES))
    creation_time = file_info.get("created_at")
    return bool(creation_time and now - creation_time > timedelta(minutes=config.RESULT_TTL_MINUTES))


def cleanup_expired(now: Optional[datetime] = None) -> List[str]:
    """Drop expired results. Returns the removed IDs."""
    now = now or datetime.now()
    # Collect first to avoid modifying dict while iterating
    expired_ids = [file_id for file_id, file_info in result_store.items() if is_expired(file_info, now)]
    for file_id in expired_ids:
        result_store.pop(file_id, None)
        logger.info("Auto-cleaned expired result %s", file_id)
    return expired_ids


async def periodic_cleanup():
    """
    Periodically evicts expired results.
    This runs in the background.
    """
    while True:
        await asyncio.sleep(config.CLEANUP_INTERVAL_SECONDS)
        try:
            cleanup_expired()
        except Exception:
            logger.exception("Cleanup of expired results failed")


@app.post("/split-pdf")
async def split_pdf_endpoint(
    file: UploadFile = File(...),
    start_page: int = 1,
    end_page: Optional[int] = None
):
    """
    Split a PDF file by page range.

    - **file**: PDF file to split
    - **start_page**: Starting page number (1-indexed)
    - **end_page**: Ending page number (1-indexed, optional - defaults to last page)
    """
    check_pdf_filename(file)
    data = await file.read()

    try:
        output = await run_in_threadpool(split_pdf, data, start_page, end_page)
    except InvalidRangeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidDocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    body = store_result(output, "{file_id}_split.pdf")
    body["message"] = "PDF split successfully"
    return body


@app.post("/merge-pdf")
async def merge_pdf_endpoint(files: List[UploadFile] = File(...)):
    """
    Merge PDF files in the order they were uploaded.

    - **files**: one or more PDF files
    """
    for upload in files:
        check_pdf_filename(upload)
    documents = [await upload.read() for upload in files]

    try:
        output = await run_in_threadpool(join_pdfs, documents)
    except EmptyJoinError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidDocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    body = store_result(output, "{file_id}_merged.pdf")
    body["message"] = f"{len(documents)} PDF(s) merged successfully"
    return body


@app.get("/download/{file_id}")
async def download_pdf(file_id: str):
    """Download a finished PDF."""

    if file_id not in result_store:
        raise HTTPException(status_code=404, detail="File not found or expired")

    file_info = result_store[file_id]

    # Mark as downloaded. The periodic cleanup will handle deletion.
    if not file_info["downloaded"]:
        file_info["downloaded"] = True
        file_info["downloaded_at"] = datetime.now()

    return Response(
        content=file_info["data"],
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{file_info["filename"]}"'},
    )


@app.get("/status/{file_id}")
async def get_file_status(file_id: str):
    """Get the status of a processing request."""

    if file_id not in result_store:
        return {"status": "not_found", "message": "File not found or expired"}

    file_info = result_store[file_id]

    return {
        "status": "ready",
        "file_id": file_id,
        "created_at": file_info["created_at"].isoformat(),
        "downloaded": file_info["downloaded"],
        "download_url": f"/download/{file_id}"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "PDF Join/Split API",
        "version": "1.0.0",
        "endpoints": {
            "split_pdf": "POST /split-pdf",
            "merge_pdf": "POST /merge-pdf",
            "download": "GET /download/{file_id}",
            "status": "GET /status/{file_id}",
            "health": "GET /health"
        },
        "file_retention": (
            f"{config.RESULT_TTL_MINUTES:g} minutes "
            f"({config.DOWNLOAD_TTL_MINUTES:g} minutes after download)"
        )
    }


if __name__ == "__main__":
    config.configure_logging()
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
