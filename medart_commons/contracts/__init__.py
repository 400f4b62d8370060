# Media Service Contracts
from .image_contracts import UploadUrlRequest, UploadGrant, TransformSpec

__all__ = ['UploadUrlRequest', 'UploadGrant', 'TransformSpec']
