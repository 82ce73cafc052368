"""
Configuration management using Pydantic Settings.

Environment variables:
- DATABASE_URL: SQLAlchemy database URL
- PAGE_WIDTH_PT / PAGE_HEIGHT_PT: Physical page size in PDF points (A4 default)
- PAGE_MARGIN_PT: Margin applied on every side of the page
- RENDER_SCALE: Surface pixels per PDF point
- MIN_FILL_RATIO: Minimum page fill before a block may pull a break earlier
- PHOTO_TIMEOUT: Seconds to wait when fetching room photos
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    DEFAULT_MARGIN_PT,
    DEFAULT_RENDER_SCALE,
    MIN_FILL_RATIO,
)
from core.models import PageLayout


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(default="sqlite:///inspection_store.db")

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8002)

    # Page geometry
    page_width_pt: float = Field(default=A4_WIDTH_PT)
    page_height_pt: float = Field(default=A4_HEIGHT_PT)
    page_margin_pt: float = Field(default=DEFAULT_MARGIN_PT)

    # Rendering
    render_scale: float = Field(default=DEFAULT_RENDER_SCALE)
    min_fill_ratio: float = Field(default=MIN_FILL_RATIO)
    photo_height_px: int = Field(default=320)
    photo_timeout: float = Field(default=15.0)
    font_path: Optional[str] = Field(default=None)
    font_bold_path: Optional[str] = Field(default=None)

    def get_page_layout(self) -> PageLayout:
        """Get physical page geometry as a PageLayout."""
        return PageLayout(
            page_width=self.page_width_pt,
            page_height=self.page_height_pt,
            margin=self.page_margin_pt,
        )

    def get_surface_width(self) -> int:
        """Width in pixels of the rendered report surface."""
        return int(round(self.get_page_layout().content_width * self.render_scale))


# Global settings instance
settings = Settings()
