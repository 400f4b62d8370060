from .image import ImageRecord

__all__ = ['ImageRecord']
