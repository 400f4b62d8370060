"""
Lambda handler decorators for the media service
"""
import json
import time
from functools import wraps
from typing import List, Optional, Callable
from .constants import HTTPConstants, ErrorConstants
from .error_handler import error_handler
from .exceptions import MediaServiceError
from .logger import logger
from .utils import create_error_response


def _caller_id(event: dict) -> Optional[str]:
    """Verified caller identity placed on the event by the API Gateway authorizer"""
    authorizer = (event.get('requestContext') or {}).get('authorizer') or {}
    claims = authorizer.get('claims') or {}
    return claims.get('sub') or authorizer.get('principalId') or None


def api_gateway_handler(
    required_fields: List[str] = None,
    require_auth: bool = True,
    internal_error_message: str = ErrorConstants.INTERNAL_ERROR,
    log_requests: bool = True
):
    """
    Decorator for API Gateway proxy handlers
    
    Adds ``parsed_body``, ``query_params``, ``path_params`` and ``owner_id``
    to the event before calling the handler, and converts raised
    exceptions into proxy responses.
    
    Args:
        required_fields: Fields that must be present in the JSON body
        require_auth: Whether a verified caller identity is required
        internal_error_message: Message shown for operator-side failures
        log_requests: Whether to log request start/end
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event, context):
            start_time = time.time()
            function_name = getattr(func, '__name__', 'unknown')
            
            def finish(success: bool, **kwargs):
                if log_requests:
                    duration_ms = (time.time() - start_time) * 1000
                    logger.log_lambda_end(function_name, success, duration_ms, **kwargs)
            
            if log_requests:
                logger.log_lambda_start(function_name, event, context)
            
            try:
                body = {}
                raw_body = event.get('body')
                if raw_body:
                    try:
                        body = json.loads(raw_body) if isinstance(raw_body, str) else raw_body
                    except json.JSONDecodeError:
                        finish(False, error='invalid_json')
                        return create_error_response(HTTPConstants.BAD_REQUEST, ErrorConstants.INVALID_JSON)
                    if not isinstance(body, dict):
                        finish(False, error='invalid_json')
                        return create_error_response(HTTPConstants.BAD_REQUEST, ErrorConstants.INVALID_JSON)
                
                owner_id = _caller_id(event)
                if require_auth and not owner_id:
                    finish(False, error='unauthenticated')
                    return create_error_response(
                        HTTPConstants.UNAUTHORIZED,
                        ErrorConstants.AUTHENTICATION_REQUIRED
                    )
                
                event['parsed_body'] = body
                event['query_params'] = event.get('queryStringParameters') or {}
                event['path_params'] = event.get('pathParameters') or {}
                event['owner_id'] = owner_id
                
                if required_fields:
                    missing_fields = [
                        field for field in required_fields
                        if field not in body or body[field] is None or body[field] == ""
                    ]
                    if missing_fields:
                        finish(False, error='missing_fields')
                        return create_error_response(
                            HTTPConstants.BAD_REQUEST,
                            f'Missing required fields: {", ".join(missing_fields)}',
                            {'missing_fields': missing_fields}
                        )
                
                result = func(event, context)
                finish(True)
                return result
            
            except MediaServiceError as e:
                finish(False, error_type=type(e).__name__)
                if e.status_code >= HTTPConstants.INTERNAL_SERVER_ERROR:
                    logger.error(f"{function_name} failed", error=e)
                error_data = error_handler.to_error_data(e, internal_error_message)
                return error_handler.create_lambda_error_response(error_data)
            
            except ValueError as e:
                finish(False, error=str(e))
                return create_error_response(HTTPConstants.BAD_REQUEST, str(e))
            
            except Exception as e:
                finish(False, error_type=type(e).__name__)
                logger.error(f"Unexpected error in {function_name}", error=e)
                return create_error_response(
                    HTTPConstants.INTERNAL_SERVER_ERROR,
                    internal_error_message
                )
        
        return wrapper
    return decorator
