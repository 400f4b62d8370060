"""
Image Service Contracts
Request and response shapes shared by the upload and delivery functions
"""
import re
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from ..constants import ErrorConstants
from ..exceptions import ValidationError


FORMAT_PATTERN = re.compile(r'^[A-Za-z0-9]+$')
LEADING_INTEGER_PATTERN = re.compile(r'\s*([+-]?\d+)')


def _positive_int(value: Any, field: str) -> Optional[int]:
    """Strictly validated optional positive integer for request bodies"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field)
    if value <= 0:
        raise ValidationError(f"{field} must be positive", field=field)
    return value


@dataclass
class UploadUrlRequest:
    """
    Body of POST /images/upload-url
    
    Only shape is checked here; content-type and size limits belong to
    the upload service.
    """
    filename: str
    content_type: str
    file_size: int
    width: Optional[int] = None
    height: Optional[int] = None
    
    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'UploadUrlRequest':
        filename = body.get('filename')
        if not isinstance(filename, str) or not filename:
            raise ValidationError(ErrorConstants.FILENAME_REQUIRED, field='filename')
        if '/' in filename or '\\' in filename:
            raise ValidationError(ErrorConstants.FILENAME_HAS_PATH, field='filename', value=filename)
        
        content_type = body.get('contentType')
        if not isinstance(content_type, str):
            raise ValidationError(ErrorConstants.ONLY_IMAGES_ALLOWED, field='contentType')
        
        file_size = body.get('fileSize')
        if isinstance(file_size, bool) or not isinstance(file_size, int):
            raise ValidationError("fileSize must be an integer", field='fileSize')
        
        return cls(
            filename=filename,
            content_type=content_type,
            file_size=file_size,
            width=_positive_int(body.get('width'), 'width'),
            height=_positive_int(body.get('height'), 'height')
        )


@dataclass
class UploadGrant:
    """Result of issuing an upload URL"""
    image_id: str
    key: str
    upload_url: str
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.image_id,
            'key': self.key,
            'uploadUrl': self.upload_url
        }


@dataclass(frozen=True)
class TransformSpec:
    """Requested derivative of a stored image"""
    width: Optional[int] = None
    height: Optional[int] = None
    quality: Optional[int] = None
    format: Optional[str] = None
    
    @staticmethod
    def _parse_dimension(value: Optional[str]) -> Optional[int]:
        if value is None:
            return None
        # Leading digits count, as in "400px" or "12.5"
        match = LEADING_INTEGER_PATTERN.match(str(value))
        if not match:
            return None
        number = int(match.group(1))
        return number if number > 0 else None
    
    @classmethod
    def from_query(cls, params: Optional[Dict[str, str]]) -> 'TransformSpec':
        """
        Lenient parse of w/h/q/f query parameters
        
        Unparsable or non-positive numbers and non-alphanumeric formats are
        dropped so the caller still gets a usable URL.
        """
        params = params or {}
        image_format = params.get('f')
        if image_format is not None:
            image_format = image_format.strip()
            if not FORMAT_PATTERN.match(image_format):
                image_format = None
        
        return cls(
            width=cls._parse_dimension(params.get('w')),
            height=cls._parse_dimension(params.get('h')),
            quality=cls._parse_dimension(params.get('q')),
            format=image_format
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {name: value for name, value in asdict(self).items() if value is not None}
