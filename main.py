"""
Thumbnail Layout Engine - FastAPI Application
"""

import base64
import binascii
import sys
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from config import settings
from modules.collision import AnchoredPoint
from modules.layout import (
    LayoutEngine,
    TextLayoutRequest,
    TextStyle,
    AutoPlacement,
    ManualPlacement,
    FreePlacement,
    AutoColor,
    ManualColor,
    DEFAULT_TEXT_POSITION,
)
from modules.logo_sizer import LOGO_POSITIONS, Discouraged, available_positions, get_position_preset
from modules.safe_zones import Canvas, Rect, DESKTOP, DEVICES
from modules.validator import PlacementElement, validate_placement
from utils.exceptions import LayoutInputError, DiscouragedPositionError

# Configure logging
logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description="Constrained text and logo layout for YouTube thumbnails"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response Models
class CanvasModel(BaseModel):
    """Canvas dimensions in pixels"""
    width: int = Field(settings.OUTPUT_WIDTH, gt=0, description="Canvas width")
    height: int = Field(settings.OUTPUT_HEIGHT, gt=0, description="Canvas height")

    def to_canvas(self) -> Canvas:
        return Canvas(self.width, self.height)


class RectModel(BaseModel):
    """Axis-aligned box (x, y is the top-left corner)"""
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    def to_rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


class TextStyleModel(BaseModel):
    """Font and effect bounds"""
    font_family: str = Field(settings.TEXT_FONT_FAMILY, description="CSS-style font family list")
    font_weight: int = Field(settings.TEXT_FONT_WEIGHT, ge=100, le=1000)
    min_font_size: int = Field(settings.TEXT_MIN_FONT_SIZE, gt=0)
    max_font_size: int = Field(settings.TEXT_MAX_FONT_SIZE, gt=0)
    line_height: float = Field(settings.TEXT_LINE_HEIGHT, gt=0)
    stroke_width: float = Field(0, ge=0)
    shadow_dx: float = 0
    shadow_dy: float = 0

    def to_style(self) -> TextStyle:
        return TextStyle(
            font_family=self.font_family,
            font_weight=self.font_weight,
            min_font_size=self.min_font_size,
            max_font_size=self.max_font_size,
            line_height=self.line_height,
            stroke_width=self.stroke_width,
            shadow_offset=(self.shadow_dx, self.shadow_dy),
        )


class TextOverlayRequest(BaseModel):
    """Request model for fitting text at a preset or custom position"""
    text: str = Field(..., min_length=1, description="Headline text")
    position: Optional[str] = Field(DEFAULT_TEXT_POSITION, description="Text position preset name")
    x: Optional[float] = Field(None, description="Custom anchor x (overrides the preset)")
    y: Optional[float] = Field(None, description="Custom vertical center (overrides the preset)")
    anchor: str = Field("middle", description="Anchor for a custom position: start, middle, end")
    style: TextStyleModel = Field(default_factory=TextStyleModel)
    canvas: CanvasModel = Field(default_factory=CanvasModel)
    device: str = Field(DESKTOP, description="desktop or mobile margins")
    max_width: Optional[float] = Field(None, gt=0)
    max_height: Optional[float] = Field(None, gt=0)
    max_lines: int = Field(settings.TEXT_MAX_LINES, ge=1)


class TextLayoutRequestModel(BaseModel):
    """Request model for full text layout"""
    text: str = Field(..., min_length=1, description="Headline text")
    position_mode: str = Field("auto", description="auto, manual or free")
    manual_position: Optional[str] = Field(None, description="Grid slot for manual mode, e.g. top-left")
    free_x: Optional[float] = Field(None, description="Left edge for free mode")
    free_y: Optional[float] = Field(None, description="Vertical center for free mode")
    text_color_mode: str = Field("auto", description="auto or manual")
    manual_text_color: Optional[str] = Field(None, description="#RRGGBB for manual color mode")
    manual_outline_color: Optional[str] = None
    style: TextStyleModel = Field(default_factory=TextStyleModel)
    canvas: CanvasModel = Field(default_factory=CanvasModel)
    subject: Optional[RectModel] = None
    logo_bounds: List[RectModel] = []
    background_base64: Optional[str] = Field(None, description="Background raster (PNG/JPEG) as base64")
    device: str = Field(DESKTOP, description="desktop or mobile margins")
    max_lines: int = Field(settings.TEXT_MAX_LINES, ge=1)


class LogoInput(BaseModel):
    """One logo to place"""
    name: str
    position: Optional[str] = Field(None, description="Logo position preset (default topRight)")
    aspect_ratio: Optional[float] = Field(None, gt=0, description="Width / height")


class LogoLayoutRequest(BaseModel):
    """Request model for logo layout"""
    logos: List[LogoInput] = []
    canvas: CanvasModel = Field(default_factory=CanvasModel)
    subject: Optional[RectModel] = None
    text_bounds: Optional[RectModel] = None
    spacing: Optional[float] = Field(None, ge=0)
    allow_discouraged: bool = Field(False, description="Acknowledge discouraged presets such as bottomRight")


class ElementModel(BaseModel):
    """Positioned element to validate"""
    name: Optional[str] = None
    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    anchor: str = "start"
    kind: str = Field("logo", description="logo or text")


class ValidateRequest(BaseModel):
    """Request model for placement validation"""
    elements: List[ElementModel] = []
    canvas: CanvasModel = Field(default_factory=CanvasModel)
    subject: Optional[RectModel] = None
    text_bounds: Optional[RectModel] = None


class StatusResponse(BaseModel):
    """Status response model"""
    status: str
    message: str


def _check_device(device: str) -> None:
    if device not in DEVICES:
        raise HTTPException(status_code=400, detail=f"Unknown device '{device}', expected one of {list(DEVICES)}")


def _decode_background(data: Optional[str]) -> Optional[bytes]:
    if not data:
        return None
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"background_base64 is not valid base64: {e}")


def _placement(request: TextLayoutRequestModel):
    if request.position_mode == "auto":
        return AutoPlacement()
    if request.position_mode == "manual":
        if not request.manual_position:
            raise HTTPException(status_code=400, detail="manual_position is required for manual mode")
        return ManualPlacement(request.manual_position)
    if request.position_mode == "free":
        if request.free_x is None or request.free_y is None:
            raise HTTPException(status_code=400, detail="free_x and free_y are required for free mode")
        return FreePlacement(request.free_x, request.free_y)
    raise HTTPException(status_code=400, detail=f"Unknown position_mode '{request.position_mode}'")


def _color_mode(request: TextLayoutRequestModel):
    if request.text_color_mode == "manual":
        if not request.manual_text_color:
            raise HTTPException(status_code=400, detail="manual_text_color is required for manual color mode")
        return ManualColor(request.manual_text_color, request.manual_outline_color)
    if request.text_color_mode == "auto":
        return AutoColor()
    raise HTTPException(status_code=400, detail=f"Unknown text_color_mode '{request.text_color_mode}'")


# API Endpoints
@app.get("/health", response_model=StatusResponse)
async def health():
    """Health check endpoint"""
    return StatusResponse(
        status="healthy",
        message="All systems operational"
    )


@app.get("/logo-positions")
async def logo_positions(width: int = settings.OUTPUT_WIDTH, height: int = settings.OUTPUT_HEIGHT):
    """List logo position presets scaled to a canvas"""
    if width <= 0 or height <= 0:
        raise HTTPException(status_code=400, detail="Canvas width and height must be positive")

    canvas = Canvas(width, height)
    presets: List[Dict] = []
    for key in LOGO_POSITIONS:
        preset = get_position_preset(key, canvas)
        presets.append({
            "key": key,
            "recommended": not isinstance(preset, Discouraged),
            "reason": preset.reason if isinstance(preset, Discouraged) else None,
            "slots": [
                {
                    "x": slot.x,
                    "y": slot.y,
                    "anchor": slot.anchor,
                    "slot": slot.slot,
                    "verticalAlign": slot.vertical_align,
                    "description": slot.description,
                }
                for slot in preset.slots
            ],
        })

    return {"positions": presets, "available": available_positions()}


@app.post("/api/text/overlay")
async def text_overlay(request: TextOverlayRequest):
    """Fit text to the space at a position and keep it inside the safe zone"""
    _check_device(request.device)

    position = request.position
    if request.x is not None and request.y is not None:
        position = AnchoredPoint(request.x, request.y, request.anchor)

    try:
        engine = LayoutEngine(request.canvas.to_canvas())
        overlay = engine.prepare_text_overlay(
            request.text,
            style=request.style.to_style(),
            position=position,
            device=request.device,
            max_width=request.max_width,
            max_height=request.max_height,
            max_lines=request.max_lines,
        )
    except LayoutInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return overlay.to_dict()


@app.post("/api/layout/text")
async def layout_text(request: TextLayoutRequestModel):
    """Fit, place, color and validate a headline"""
    _check_device(request.device)

    layout_request = TextLayoutRequest(
        text=request.text,
        placement=_placement(request),
        color=_color_mode(request),
        style=request.style.to_style(),
        background=_decode_background(request.background_base64),
        subject=request.subject.to_rect() if request.subject else None,
        logo_bounds=tuple(r.to_rect() for r in request.logo_bounds),
        device=request.device,
        max_lines=request.max_lines,
    )

    try:
        engine = LayoutEngine(request.canvas.to_canvas())
        layout = engine.calculate_text_layout(layout_request)
    except LayoutInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return layout.to_dict()


@app.post("/api/layout/logos")
async def layout_logos(request: LogoLayoutRequest):
    """Size, align and validate logos"""
    try:
        engine = LayoutEngine(request.canvas.to_canvas())
        overlay = engine.prepare_logo_overlay(
            [logo.model_dump() for logo in request.logos],
            subject=request.subject.to_rect() if request.subject else None,
            text_bounds=request.text_bounds.to_rect() if request.text_bounds else None,
            spacing=request.spacing,
            allow_discouraged=request.allow_discouraged,
        )
    except DiscouragedPositionError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except LayoutInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return overlay.to_dict()


@app.post("/api/validate")
async def validate(request: ValidateRequest):
    """Validate positioned elements against canvas, margins, subject, text and platform UI"""
    elements = [
        PlacementElement(e.name, e.x, e.y, e.width, e.height, e.anchor, e.kind)
        for e in request.elements
    ]

    try:
        result = validate_placement(
            elements,
            subject_bounds=request.subject.to_rect() if request.subject else None,
            text_bounds=request.text_bounds.to_rect() if request.text_bounds else None,
            canvas=request.canvas.to_canvas(),
        )
    except LayoutInputError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return result.to_dict()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True
    )
