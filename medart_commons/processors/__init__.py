from .image import image_processor

__all__ = ['image_processor']
