"""
Configuration settings for the Thumbnail Layout Engine
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Reference canvas (all zone, margin and preset tables are defined at this size)
    REFERENCE_WIDTH: int = 1920
    REFERENCE_HEIGHT: int = 1080

    # Default output canvas
    OUTPUT_WIDTH: int = 1920
    OUTPUT_HEIGHT: int = 1080

    # Auto-fit defaults
    TEXT_MAX_WIDTH: int = 1000
    TEXT_MAX_HEIGHT: int = 400
    TEXT_MIN_FONT_SIZE: int = 60
    TEXT_MAX_FONT_SIZE: int = 280
    TEXT_FONT_FAMILY: str = "Impact"
    TEXT_FONT_WEIGHT: int = 900
    TEXT_LINE_HEIGHT: float = 1.1
    TEXT_MAX_LINES: int = 3
    FONT_SIZE_STEP: int = 4  # Descending search step (px)

    # Text budget (readability at preview sizes)
    TEXT_MAX_WORDS: int = 5

    # Logo layout
    LOGO_SPACING: int = 40
    LOGO_MIN_SPACING: int = 20  # Must stay above the validator's 10px padding
    LOGO_MIN_HEIGHT: int = 40
    LOGO_MAX_HEIGHT: int = 180

    # Background sampling
    SAMPLE_COUNT: int = 9  # 3x3 grid
    SAMPLE_REGION_CAP: int = 100  # Max extract size per grid cell (px)
    SAMPLE_FALLBACK_COLOR: str = "#808080"
    SAMPLE_MAX_PIXELS: int = 40_000_000  # Larger rasters are not decoded

    # WCAG thresholds
    CONTRAST_AA: float = 4.5
    CONTRAST_AA_LARGE: float = 3.0

    # Logging
    LOG_LEVEL: str = "INFO"

    # FastAPI settings
    API_TITLE: str = "Thumbnail Layout Engine API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
