"""
Image Upload URL Lambda Function
POST /images/upload-url - issues a pre-signed PUT URL for a new original
"""
import json

from medart_commons.constants import HTTPConstants, ErrorConstants
from medart_commons.contracts import UploadUrlRequest
from medart_commons.decorators import api_gateway_handler
from medart_commons.services.service_container import get_service
from medart_commons.utils import create_response


@api_gateway_handler(
    required_fields=['filename', 'contentType', 'fileSize'],
    internal_error_message=ErrorConstants.UPLOAD_URL_FAILED
)
def lambda_handler(event, context):
    """
    Expected body:
    {
        "filename": "photo.png",
        "contentType": "image/png",
        "fileSize": 2048576,
        "width": 1200,     // optional
        "height": 800      // optional
    }
    
    Returns {"id", "key", "uploadUrl"}.
    """
    request = UploadUrlRequest.from_body(event['parsed_body'])
    
    upload_service = get_service('upload_service')
    grant = upload_service.create_upload_grant(
        owner_id=event['owner_id'],
        filename=request.filename,
        content_type=request.content_type,
        file_size=request.file_size,
        width=request.width,
        height=request.height
    )
    
    return create_response(HTTPConstants.OK, json.dumps(grant.to_dict()))
