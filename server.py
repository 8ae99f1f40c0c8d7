"""
FastAPI Server for Cone Tracking

Provides REST endpoints that locate the cone in a single frame, for
robot controllers that stream frames over HTTP.
"""

import base64
import binascii
import logging
from typing import List, Optional

import cv2
import numpy as np
from fastapi import FastAPI, HTTPException, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from cone_tracking.config import TrackerConfig
from cone_tracking.models import ConeDetection
from cone_tracking.session import TrackingSession

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Cone Tracking API",
    description="Locates a colored cone in a camera frame and returns normalized steering coordinates",
    version="1.0.0",
)

# Add CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class Base64FrameRequest(BaseModel):
    """Request body for a base64-encoded frame"""
    image: str  # Base64-encoded image (with or without data URL prefix)
    include_contour: bool = False

    # Optional configuration overrides
    target_color: Optional[List[int]] = None  # [h, s, v]
    tolerance_radius: Optional[List[int]] = None  # [h, s, v]
    min_size_fraction: Optional[float] = None


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str


def image_from_base64(base64_string: str) -> Optional[np.ndarray]:
    """Decode a base64 image string to a BGR numpy array"""
    # Remove data URL prefix if present
    if "," in base64_string:
        base64_string = base64_string.split(",")[1]

    try:
        img_bytes = base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError):
        return None

    img_array = np.frombuffer(img_bytes, dtype=np.uint8)
    if img_array.size == 0:
        return None
    return cv2.imdecode(img_array, cv2.IMREAD_COLOR)


def run_detection(image: np.ndarray, config: TrackerConfig) -> ConeDetection:
    """Run a one-frame session on a decoded BGR image."""
    height, width = image.shape[:2]
    session = TrackingSession(config)
    session.start(width, height)
    try:
        return session.process_frame(image)
    finally:
        session.stop()


def detection_response(image: np.ndarray, detection: ConeDetection, include_contour: bool) -> dict:
    height, width = image.shape[:2]
    return {
        "image_dimensions": {"width": int(width), "height": int(height)},
        "detection": detection.to_dict(include_contour=include_contour),
        "display": list(detection.format_display()),
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status="healthy", version="1.0.0")


@app.post("/locate")
async def locate_base64(request: Base64FrameRequest):
    """
    Locate the cone in a base64-encoded frame.

    Returns found flag, horizontal/vertical offsets and size fraction.
    """
    logger.info("Received locate request")

    image = image_from_base64(request.image)
    if image is None:
        raise HTTPException(status_code=400, detail="Failed to decode image")

    overrides = {}
    if request.target_color is not None:
        overrides["target_color"] = request.target_color
    if request.tolerance_radius is not None:
        overrides["tolerance_radius"] = request.tolerance_radius
    if request.min_size_fraction is not None:
        overrides["min_size_fraction"] = request.min_size_fraction

    try:
        config = TrackerConfig.from_dict({**TrackerConfig.default().to_dict(), **overrides})
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        detection = run_detection(image, config)
    except Exception as e:
        logger.error(f"Detection error: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Frame {image.shape[1]}x{image.shape[0]}: found={detection.found}")
    return detection_response(image, detection, request.include_contour)


@app.post("/locate/upload")
async def locate_upload(
    file: UploadFile = File(...),
    include_contour: bool = False,
):
    """
    Locate the cone in an uploaded image file with the default configuration.

    Accepts JPEG, PNG image files.
    """
    logger.info(f"Received file upload: {file.filename}")

    contents = await file.read()
    nparr = np.frombuffer(contents, np.uint8)
    image = cv2.imdecode(nparr, cv2.IMREAD_COLOR) if nparr.size else None

    if image is None:
        raise HTTPException(status_code=400, detail="Failed to decode uploaded image")

    try:
        detection = run_detection(image, TrackerConfig.default())
    except Exception as e:
        logger.error(f"Detection error: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Frame {image.shape[1]}x{image.shape[0]}: found={detection.found}")
    return detection_response(image, detection, include_contour)


@app.get("/locate/config")
async def get_default_config():
    """Get the default tracker configuration"""
    return TrackerConfig.default().to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
