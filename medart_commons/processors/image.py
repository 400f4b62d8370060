"""
Image inspection utilities using Pillow
"""
import io
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError
from ..logger import logger


class ImageProcessor:
    """
    Reads image headers without decoding pixel data
    """
    
    def read_dimensions(self, image_data: bytes) -> Optional[Tuple[int, int]]:
        """
        Pixel dimensions of an encoded image
        
        Args:
            image_data: Raw image bytes
            
        Returns:
            (width, height), or None when Pillow cannot identify the format
        """
        try:
            # open() parses the header only
            with Image.open(io.BytesIO(image_data)) as image:
                return image.size
        except (UnidentifiedImageError, OSError) as e:
            logger.warning("Could not read image dimensions",
                           error_type=type(e).__name__,
                           data_size=len(image_data))
            return None


# Global processor instance
image_processor = ImageProcessor()
