"""
Response and storage-key utilities for the media service
"""
import json
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .constants import HTTPConstants, StorageConstants


def create_response(status_code: int, body: str, headers: Optional[dict] = None) -> Dict[str, Any]:
    """
    Create standardized Lambda proxy response
    
    Args:
        status_code: HTTP status code
        body: Response body (JSON string)
        headers: Additional headers
        
    Returns:
        Lambda proxy integration response
    """
    default_headers = {
        HTTPConstants.CONTENT_TYPE: HTTPConstants.JSON,
        HTTPConstants.ACCESS_CONTROL_ALLOW_ORIGIN: '*',
        HTTPConstants.ACCESS_CONTROL_ALLOW_HEADERS: 'Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token',
        HTTPConstants.ACCESS_CONTROL_ALLOW_METHODS: 'GET,POST,PUT,DELETE,OPTIONS'
    }
    
    if headers:
        default_headers.update(headers)
    
    return {
        'statusCode': status_code,
        'headers': default_headers,
        'body': body
    }


def create_error_response(status_code: int, message: str, details: Optional[dict] = None) -> Dict[str, Any]:
    """
    Create standardized error response
    
    Args:
        status_code: HTTP status code
        message: Error message
        details: Additional error details
        
    Returns:
        Lambda proxy integration error response
    """
    error_body = {
        'success': False,
        'error': message,
        'timestamp': datetime.now(timezone.utc).isoformat()
    }
    
    if details:
        error_body.update(details)
    
    return create_response(status_code, json.dumps(error_body))


def file_extension(filename: str) -> str:
    """
    Extension of a client-supplied filename, dot included
    
    Case is preserved. Returns '' when the name has no dot or ends in one.
    """
    if not filename or '.' not in filename:
        return ''
    extension = filename.rsplit('.', 1)[1]
    return f".{extension}" if extension else ''


def generate_storage_key(owner_id: str, image_id: str, filename: str) -> str:
    """
    Generate the storage key for an uploaded original
    
    Args:
        owner_id: Verified caller identity
        image_id: Fresh image identifier
        filename: Client-supplied filename, used only for its extension
        
    Returns:
        users/{owner_id}/images/{image_id}/original[.ext]
    """
    return StorageConstants.ORIGINAL_KEY_PATTERN.format(
        owner_id=owner_id,
        image_id=image_id,
        extension=file_extension(filename)
    )


def generate_public_url(public_endpoint: Optional[str], key: str) -> str:
    """
    Direct public URL for a stored object
    
    A missing endpoint yields a root-relative path rather than an error.
    """
    return f"{(public_endpoint or '').rstrip('/')}/{key}"
