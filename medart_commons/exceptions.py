"""
Media Service Exceptions
Custom exception classes for upload and delivery operations
"""


class MediaServiceError(Exception):
    """Base exception for all media service errors"""
    
    status_code = 500
    retryable = False
    
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)
    
    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses"""
        result = {
            'error': self.__class__.__name__,
            'message': self.message
        }
        if self.error_code:
            result['error_code'] = self.error_code
        if self.details:
            result['details'] = self.details
        return result


class ValidationError(MediaServiceError):
    """Raised when input validation fails"""
    
    status_code = 400
    
    def __init__(self, message: str, field: str = None, value: str = None, hints: list = None):
        self.field = field
        self.value = value
        self.hints = hints or []
        
        details = {}
        if field:
            details['field'] = field
        if value:
            details['value'] = value
        if hints:
            details['hints'] = hints
            
        super().__init__(message, 'VALIDATION_ERROR', details)


class PayloadTooLargeError(MediaServiceError):
    """Raised when a declared upload exceeds the size limit"""
    
    status_code = 400
    
    def __init__(self, message: str, max_size: int = None, actual_size: int = None):
        self.max_size = max_size
        self.actual_size = actual_size
        
        details = {}
        if max_size:
            details['max_size_bytes'] = max_size
        if actual_size:
            details['actual_size_bytes'] = actual_size
            
        super().__init__(message, 'PAYLOAD_TOO_LARGE', details)


class NotFoundError(MediaServiceError):
    """Raised when a record or stored object does not exist"""
    
    status_code = 404
    
    def __init__(self, resource_type: str, resource_id: str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        
        message = f"{resource_type.capitalize()} '{resource_id}' not found"
        details = {
            'resource_type': resource_type,
            'resource_id': resource_id
        }
        
        super().__init__(message, 'NOT_FOUND', details)


class AuthenticationError(MediaServiceError):
    """Raised when the storage provider rejects our credentials"""
    
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, 'AUTHENTICATION_ERROR')


class ConfigurationError(MediaServiceError):
    """Raised when configuration is invalid or missing"""
    
    def __init__(self, message: str, config_key: str = None, config_source: str = None):
        self.config_key = config_key
        self.config_source = config_source
        
        details = {}
        if config_key:
            details['config_key'] = config_key
        if config_source:
            details['config_source'] = config_source
            
        super().__init__(message, 'CONFIGURATION_ERROR', details)


class UnavailableError(MediaServiceError):
    """Raised when a dependent service cannot be reached"""
    
    retryable = True
    
    def __init__(self, message: str, service: str = None, retry_after: int = None):
        self.service = service
        self.retry_after = retry_after
        
        details = {}
        if service:
            details['service'] = service
        if retry_after:
            details['retry_after_seconds'] = retry_after
            
        super().__init__(message, 'SERVICE_UNAVAILABLE', details)
