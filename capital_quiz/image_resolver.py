"""
Country image lookup for the quiz display.
"""
import logging
from pathlib import Path
from typing import Optional, Tuple


class ImageResolver:
    """Finds the picture bundled for a country, if any."""

    EXTENSIONS: Tuple[str, ...] = (".jpg", ".png")

    def __init__(self, image_directory: str = "./images/"):
        """
        Initialize ImageResolver with the image directory path.

        Args:
            image_directory: Directory holding one image per country, named
                after the country (e.g. "France.jpg")
        """
        self.image_directory = Path(image_directory)
        self.logger = logging.getLogger(__name__)

    def resolve(self, country: str) -> Optional[Path]:
        """
        Look up the image for a country.

        A missing image is not an error: the display shows a placeholder.

        Args:
            country: Country name as shown in the question

        Returns:
            Path to the image, or None if no image exists for the country
        """
        for extension in self.EXTENSIONS:
            candidate = self.image_directory / f"{country}{extension}"
            try:
                if candidate.is_file():
                    return candidate
            except OSError as e:
                self.logger.warning(f"Cannot access image {candidate}: {e}")
                return None

        self.logger.warning(f"No image found for country: {country}")
        return None
