"""
farmplanner Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent

    # Grid Configuration
    # Pixel edge length of one grid cell. Pixel -> grid conversion is floor(px / TILE_SIZE).
    TILE_SIZE: int = int(os.getenv("TILE_SIZE", "16"))
    # Reject footprints that leave the location's grid (OutOfBounds)
    ENFORCE_BOUNDS: bool = _env_flag("ENFORCE_BOUNDS", "true")

    # Data Configuration
    # Holds the object catalog category files, locations-manifest.json and locations/
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))
    # Saved layouts for JsonLayoutPersistence
    LAYOUTS_DIR: Path = Path(os.getenv("LAYOUTS_DIR", "layouts"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.TILE_SIZE <= 0:
            raise ValueError(
                f"TILE_SIZE must be a positive number of pixels, got {cls.TILE_SIZE}"
            )

        if not cls.DATA_DIR.exists():
            raise ValueError(
                f"DATA_DIR {cls.DATA_DIR} does not exist. "
                "Point DATA_DIR at a directory containing the object catalog "
                "and locations-manifest.json."
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "farmplanner Configuration:",
            f"  Tile Size: {cls.TILE_SIZE}px",
            f"  Enforce Bounds: {cls.ENFORCE_BOUNDS}",
            f"  Data Dir: {cls.DATA_DIR}",
            f"  Layouts Dir: {cls.LAYOUTS_DIR}",
        ]
        return "\n".join(lines)
