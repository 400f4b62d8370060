"""
Media Service Constants
"""


class HTTPConstants:
    """HTTP status codes and headers"""
    
    # Status codes
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
    
    # Headers
    CONTENT_TYPE = 'Content-Type'
    ACCESS_CONTROL_ALLOW_ORIGIN = 'Access-Control-Allow-Origin'
    ACCESS_CONTROL_ALLOW_HEADERS = 'Access-Control-Allow-Headers'
    ACCESS_CONTROL_ALLOW_METHODS = 'Access-Control-Allow-Methods'
    
    # MIME types
    JSON = 'application/json'


class ImageConstants:
    """Image upload and delivery constants"""
    
    IMAGE_MIME_PREFIX = 'image/'
    
    # Size limits (bytes)
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    
    # Served when an artwork or avatar has no stored image yet
    PLACEHOLDER_IMAGE_PATH = '/placeholder-artwork.svg'
    
    # Upload record lifecycle
    STATUS_PENDING = 'pending'
    STATUS_UPLOADED = 'uploaded'
    
    # Prefix read when recovering dimensions of a stored original
    HEADER_READ_BYTES = 64 * 1024


class StorageConstants:
    """Object storage constants"""
    
    # Path patterns
    ORIGINAL_KEY_PATTERN = 'users/{owner_id}/images/{image_id}/original{extension}'
    
    DEFAULT_REGION = 'auto'
    SIGNATURE_VERSION = 's3v4'
    
    # Only the host header participates in upload signatures
    SIGNED_HEADERS = frozenset(['host'])


class ImgproxyConstants:
    """Image proxy URL composition"""
    
    RESIZE_FIT = 'rs:fit:{width}:{height}'
    WIDTH = 'w:{width}'
    HEIGHT = 'h:{height}'
    QUALITY = 'q:{quality}'
    FORMAT = 'f:{format}'
    SOURCE_MARKER = 'plain'


class TimeConstants:
    """Time-related constants"""
    
    UPLOAD_URL_EXPIRY = 5 * 60  # 5 minutes


class ErrorConstants:
    """Error message constants"""
    
    INTERNAL_ERROR = 'Internal server error'
    INVALID_JSON = 'Invalid JSON in request body'
    AUTHENTICATION_REQUIRED = 'Authentication required'
    
    UPLOAD_URL_FAILED = 'Failed to generate upload URL'
    UPLOAD_CONFIRM_FAILED = 'Failed to confirm upload'
    IMAGE_KEY_REQUIRED = 'Image key is required'
    
    ONLY_IMAGES_ALLOWED = 'Only image files are allowed'
    FILE_TOO_LARGE = 'File size exceeds the maximum limit of {limit_mb}MB'
    FILE_SIZE_NOT_POSITIVE = 'File size must be positive'
    FILENAME_REQUIRED = 'Filename is required'
    FILENAME_HAS_PATH = 'Filename must not contain path separators'
