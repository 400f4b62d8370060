"""
Image Proxy URL Lambda Function
GET /imgproxy?key=&w=&h=&q=&f= - returns a delivery URL for a stored image

Browsers cannot hold the proxy signing secrets, so they ask here.
"""
import json

from medart_commons.constants import HTTPConstants, ErrorConstants
from medart_commons.contracts import TransformSpec
from medart_commons.decorators import api_gateway_handler
from medart_commons.exceptions import ValidationError
from medart_commons.services.service_container import get_service
from medart_commons.utils import create_response


@api_gateway_handler(require_auth=False)
def lambda_handler(event, context):
    params = event['query_params']
    
    image_key = params.get('key')
    if not image_key:
        raise ValidationError(ErrorConstants.IMAGE_KEY_REQUIRED, field='key')
    
    delivery_service = get_service('delivery_service')
    url = delivery_service.build_delivery_url(image_key, TransformSpec.from_query(params))
    
    return create_response(HTTPConstants.OK, json.dumps({'url': url}))
