"""
Delivery service
Builds signed image proxy URLs, degrading to direct public links
"""
from typing import Optional, List

from ..config import ImgproxySettings
from ..constants import ImageConstants, ImgproxyConstants
from ..contracts import TransformSpec
from ..logger import delivery_logger as logger
from ..signing import sign, urlsafe_b64
from ..utils import generate_public_url


class DeliveryService:
    """
    Delivery URL transformer
    
    Pure URL construction with no network calls. Never raises: missing
    proxy settings mean the original is served directly, a missing key
    means the placeholder is served.
    """
    
    def __init__(self, imgproxy: Optional[ImgproxySettings] = None, public_endpoint: Optional[str] = None):
        self.imgproxy = imgproxy
        self.public_endpoint = public_endpoint or (imgproxy.public_endpoint if imgproxy else None)
    
    @property
    def signing_enabled(self) -> bool:
        return self.imgproxy is not None
    
    @staticmethod
    def processing_options(transform: TransformSpec) -> List[str]:
        """Ordered proxy options for a transform"""
        options = []
        
        if transform.width and transform.height:
            options.append(ImgproxyConstants.RESIZE_FIT.format(width=transform.width, height=transform.height))
        elif transform.width:
            options.append(ImgproxyConstants.WIDTH.format(width=transform.width))
        elif transform.height:
            options.append(ImgproxyConstants.HEIGHT.format(height=transform.height))
        
        if transform.quality:
            options.append(ImgproxyConstants.QUALITY.format(quality=transform.quality))
        if transform.format:
            options.append(ImgproxyConstants.FORMAT.format(format=transform.format))
        
        return options
    
    def signed_path(self, object_key: str, transform: TransformSpec) -> str:
        """
        Proxy path for a key, excluding the signature
        
        /{options...}/plain/{base64url(source url)}
        """
        source_url = generate_public_url(self.imgproxy.public_endpoint, object_key)
        options = self.processing_options(transform)
        
        path = ''
        if options:
            path = '/' + '/'.join(options)
        return f"{path}/{ImgproxyConstants.SOURCE_MARKER}/{urlsafe_b64(source_url.encode('utf-8'))}"
    
    def build_delivery_url(self, object_key: Optional[str], transform: Optional[TransformSpec] = None) -> str:
        """
        URL at which a transformed copy of the object can be fetched
        
        Args:
            object_key: Storage key of the original
            transform: Optional width/height/quality/format
            
        Returns:
            Signed proxy URL, direct public URL, or the placeholder path
        """
        if not object_key:
            return ImageConstants.PLACEHOLDER_IMAGE_PATH
        
        if not self.signing_enabled:
            return generate_public_url(self.public_endpoint, object_key)
        
        transform = transform or TransformSpec()
        try:
            path = self.signed_path(object_key, transform)
            signature = sign(self.imgproxy.key, self.imgproxy.salt, path)
        except (TypeError, ValueError) as e:
            logger.warning("Falling back to direct image URL",
                           error_type=type(e).__name__,
                           object_key=object_key)
            return generate_public_url(self.public_endpoint, object_key)
        
        logger.debug("Signed delivery URL built", object_key=object_key, **transform.to_dict())
        return f"{self.imgproxy.base_url.rstrip('/')}/{signature}{path}"
    
    def build_record_url(self, record, transform: Optional[TransformSpec] = None) -> str:
        """
        Delivery URL for an image record
        
        The record's stored dimensions are used when the transform sets
        neither width nor height.
        """
        if record is None:
            return ImageConstants.PLACEHOLDER_IMAGE_PATH
        
        transform = transform or TransformSpec()
        if transform.width is None and transform.height is None:
            transform = TransformSpec(
                width=record.width,
                height=record.height,
                quality=transform.quality,
                format=transform.format
            )
        
        return self.build_delivery_url(record.object_key, transform)
