"""
Service container for dependency injection
"""
from typing import Dict, Any
from ..config import config
from .upload_service import UploadService
from .delivery_service import DeliveryService


class ServiceContainer:
    """
    Simple service container for dependency injection
    Services are built lazily from the global configuration, once per container
    """
    
    def __init__(self, app_config=None):
        self._config = app_config or config
        self._services: Dict[str, Any] = {}
    
    def get_service(self, service_name: str):
        """
        Get service instance with lazy initialization
        
        Raises:
            ValueError: If service is not registered
            ConfigurationError: If a required setting is missing
        """
        if service_name not in self._services:
            self._services[service_name] = self._create_service(service_name)
        
        return self._services[service_name]
    
    def _create_service(self, service_name: str):
        if service_name == 'upload_service':
            return UploadService(
                self._config.storage_settings(),
                max_file_size=self._config.max_upload_size,
                expires_in=self._config.upload_url_expiry
            )
        elif service_name == 'delivery_service':
            return DeliveryService(
                self._config.imgproxy_settings(),
                public_endpoint=self._config.public_endpoint
            )
        else:
            raise ValueError(f"Unknown service: {service_name}")
    
    def register_service(self, service_name: str, service_instance):
        """Register a service instance"""
        self._services[service_name] = service_instance
    
    def clear_services(self):
        """Clear all cached services (useful for testing)"""
        self._services.clear()


# Global service container instance
_service_container = ServiceContainer()


def get_service(service_name: str):
    """Get service from global container"""
    return _service_container.get_service(service_name)


def register_service(service_name: str, service_instance):
    """Register service in global container"""
    _service_container.register_service(service_name, service_instance)


def clear_services():
    """Clear all services (useful for testing)"""
    _service_container.clear_services()
