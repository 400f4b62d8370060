"""
AWS error handling utilities for the media service
"""
import json
from datetime import datetime, timezone
from typing import Dict, Any
from botocore.exceptions import (
    ClientError, BotoCoreError, EndpointConnectionError, ConnectionClosedError,
    ConnectTimeoutError, ReadTimeoutError, NoCredentialsError, PartialCredentialsError
)
from pynamodb.exceptions import PynamoDBException
from .constants import HTTPConstants, ErrorConstants
from .exceptions import (
    MediaServiceError, AuthenticationError, ConfigurationError, UnavailableError
)
from .logger import logger
from .utils import create_response


AUTHENTICATION_ERROR_CODES = {
    'InvalidAccessKeyId', 'SignatureDoesNotMatch', 'AccessDenied',
    'UnrecognizedClientException', 'InvalidSignatureException', 'ExpiredToken'
}
CONFIGURATION_ERROR_CODES = {'NoSuchBucket', 'ResourceNotFoundException'}
UNAVAILABLE_ERROR_CODES = {
    'ThrottlingException', 'ProvisionedThroughputExceededException',
    'SlowDown', 'RequestLimitExceeded', 'ServiceUnavailable', 'InternalError'
}
CONNECTION_ERRORS = (
    EndpointConnectionError, ConnectionClosedError, ConnectTimeoutError, ReadTimeoutError
)


class AWSErrorHandler:
    """
    Centralized AWS error classification for the media service
    
    Provider detail is logged here and never copied into the exceptions
    returned to callers.
    """
    
    @staticmethod
    def _root_cause(error: Exception) -> Exception:
        """Unwrap PynamoDB exceptions to the botocore error underneath"""
        seen = set()
        while isinstance(error, PynamoDBException) and id(error) not in seen:
            seen.add(id(error))
            cause = getattr(error, 'cause', None) or error.__cause__
            if cause is None:
                break
            error = cause
        return error
    
    @classmethod
    def classify(cls, error: Exception, operation: str, service: str = 'storage') -> MediaServiceError:
        """
        Map a provider exception onto the media service taxonomy
        
        Args:
            error: The exception that occurred
            operation: The operation being performed
            service: Dependent service name for context ('storage', 'database')
            
        Returns:
            MediaServiceError subclass instance safe to surface
        """
        if isinstance(error, MediaServiceError):
            return error
        
        root = cls._root_cause(error)
        error_context = {
            'operation': operation,
            'service': service,
            'error_type': type(root).__name__
        }
        
        if isinstance(root, ClientError):
            error_code = root.response.get('Error', {}).get('Code', 'Unknown')
            error_context['aws_error_code'] = error_code
            logger.error(f"{service.capitalize()} ClientError", error=root, **error_context)
            
            if error_code in AUTHENTICATION_ERROR_CODES:
                return AuthenticationError(f"{service.capitalize()} authentication failed")
            if error_code in CONFIGURATION_ERROR_CODES:
                return ConfigurationError(
                    f"{service.capitalize()} resource is missing or inaccessible",
                    config_source=service
                )
            if error_code in UNAVAILABLE_ERROR_CODES:
                return UnavailableError(f"{service.capitalize()} is busy", service=service)
            return MediaServiceError(f"{service.capitalize()} operation failed", 'INTERNAL_ERROR')
        
        if isinstance(root, (NoCredentialsError, PartialCredentialsError)):
            logger.error(f"{service.capitalize()} credentials missing", **error_context)
            return ConfigurationError(f"{service.capitalize()} credentials are not configured")
        
        if isinstance(root, CONNECTION_ERRORS):
            logger.error(f"Could not reach {service}", error=root, **error_context)
            return UnavailableError(f"Could not connect to {service}", service=service)
        
        if isinstance(root, (BotoCoreError, PynamoDBException)):
            logger.error(f"{service.capitalize()} client error", error=root, **error_context)
            return MediaServiceError(f"{service.capitalize()} operation failed", 'INTERNAL_ERROR')
        
        logger.error(f"Unexpected {service} error", error=root, **error_context)
        return MediaServiceError(f"Unexpected {service} error", 'INTERNAL_ERROR')
    
    @staticmethod
    def to_error_data(error: MediaServiceError, internal_message: str = None) -> Dict[str, Any]:
        """
        Convert a media service exception into response data
        
        Client-correctable errors keep their message; operator-side errors
        are replaced by ``internal_message``.
        """
        status_code = getattr(error, 'status_code', HTTPConstants.INTERNAL_SERVER_ERROR)
        
        if status_code < HTTPConstants.INTERNAL_SERVER_ERROR:
            error_data = {
                'success': False,
                'error_type': type(error).__name__,
                'error_message': error.message,
                'status_code': status_code,
                'retryable': False
            }
            field = getattr(error, 'field', None)
            if field:
                error_data['field'] = field
            return error_data
        
        return {
            'success': False,
            'error_type': 'InternalError',
            'error_message': internal_message or ErrorConstants.INTERNAL_ERROR,
            'status_code': status_code,
            'retryable': error.retryable
        }
    
    @staticmethod
    def create_lambda_error_response(error_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create Lambda-compatible error response
        
        Args:
            error_data: Error data from to_error_data
            
        Returns:
            Lambda proxy integration response
        """
        response_body = {
            'success': error_data['success'],
            'error': error_data['error_message'],
            'error_type': error_data['error_type'],
            'retryable': error_data.get('retryable', False),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }
        
        if 'field' in error_data:
            response_body['field'] = error_data['field']
        
        return create_response(error_data['status_code'], json.dumps(response_body))


# Global error handler instance
error_handler = AWSErrorHandler()
