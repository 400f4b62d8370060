"""
Image Confirm Lambda Function
POST /images/{id}/confirm - marks a pending image record as uploaded
"""
import json

from medart_commons.constants import HTTPConstants, ErrorConstants
from medart_commons.decorators import api_gateway_handler
from medart_commons.exceptions import ValidationError
from medart_commons.services.service_container import get_service
from medart_commons.utils import create_response


@api_gateway_handler(internal_error_message=ErrorConstants.UPLOAD_CONFIRM_FAILED)
def lambda_handler(event, context):
    image_id = event['path_params'].get('id') or event['parsed_body'].get('id')
    if not image_id:
        raise ValidationError('Image id is required', field='id')
    
    upload_service = get_service('upload_service')
    record = upload_service.confirm_upload(event['owner_id'], image_id)
    
    delivery_service = get_service('delivery_service')
    
    return create_response(
        HTTPConstants.OK,
        json.dumps({
            'success': True,
            'image': record.to_dict(),
            'url': delivery_service.build_record_url(record)
        })
    )
