"""
Configuration management for the media service
Supports environment variables, SSM Parameter Store, and local .env files
"""
import os
from dataclasses import dataclass
from typing import Optional, Any
from functools import lru_cache
import boto3
from botocore.exceptions import ClientError, NoCredentialsError
from dotenv import load_dotenv

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class StorageSettings:
    """Credentials and location of the S3-compatible object store"""
    endpoint: str
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    region: str = 'auto'
    public_endpoint: Optional[str] = None


@dataclass(frozen=True)
class ImgproxySettings:
    """Signing material for the image transformation proxy"""
    base_url: str
    key: bytes
    salt: bytes
    public_endpoint: str


class Config:
    """
    Configuration manager with hybrid approach:
    1. Environment Variables (highest priority)
    2. AWS Parameter Store (environment-specific)
    3. Local defaults (development fallback)
    """
    
    def __init__(self):
        load_dotenv(override=False)
        self.environment = os.environ.get('ENVIRONMENT', 'dev')
        self.parameter_store_prefix = os.environ.get(
            'PARAMETER_STORE_PREFIX', 
            f'/medart/{self.environment}/media-service'
        )
        self.parameter_store_enabled = os.environ.get(
            'PARAMETER_STORE_ENABLED', 'true'
        ).lower() in ('true', '1', 'yes', 'on')
        self._ssm_client = None
    
    @property
    def ssm_client(self):
        """Lazy initialization of SSM client"""
        if self._ssm_client is None and self.parameter_store_enabled:
            try:
                self._ssm_client = boto3.client('ssm')
            except (NoCredentialsError, Exception):
                # For local development or testing without AWS credentials
                self._ssm_client = None
        return self._ssm_client
    
    def get_parameter(self, key: str, default: Any = None) -> Any:
        """
        Get configuration parameter with fallback hierarchy:
        1. Environment variable
        2. SSM Parameter Store
        3. Default value
        """
        env_name = key.upper().replace('-', '_')

        # Namespaced variable wins over the plain one
        env_value = os.environ.get(f"MEDART_{env_name}")
        if env_value is not None:
            return env_value
        
        env_value = os.environ.get(env_name)
        if env_value is not None:
            return env_value
        
        ssm_value = self.get_ssm_parameter(key)
        if ssm_value is not None:
            return ssm_value
        
        return default
    
    @lru_cache(maxsize=128)
    def get_ssm_parameter(self, key: str) -> Optional[str]:
        """
        Get parameter from AWS SSM Parameter Store with caching
        """
        if not self.ssm_client:
            return None
        
        parameter_name = f"{self.parameter_store_prefix}/{key}"
        
        try:
            response = self.ssm_client.get_parameter(Name=parameter_name, WithDecryption=True)
            return response['Parameter']['Value']
        except ClientError as e:
            if e.response['Error']['Code'] != 'ParameterNotFound':
                print(f"Error getting SSM parameter {parameter_name}: {e.response['Error']['Code']}")
            return None
        except Exception as e:
            print(f"Unexpected error getting SSM parameter {parameter_name}: {type(e).__name__}")
            return None
    
    def get_int_parameter(self, key: str, default: int = 0) -> int:
        """Get integer parameter"""
        value = self.get_parameter(key, default)
        try:
            return int(value)
        except (ValueError, TypeError):
            return default
    
    def get_bool_parameter(self, key: str, default: bool = False) -> bool:
        """Get boolean parameter"""
        value = self.get_parameter(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ('true', '1', 'yes', 'on')
        return default
    
    @property
    def image_table_name(self) -> str:
        """Get image metadata table name"""
        return self.get_parameter('image-table-name', f'Images-{self.environment}')
    
    @property
    def aws_region(self) -> str:
        """Region of the DynamoDB table"""
        return self.get_parameter('aws-region', os.environ.get('AWS_DEFAULT_REGION', 'us-east-1'))
    
    @property
    def max_upload_size(self) -> int:
        """Get maximum upload size in bytes"""
        return self.get_int_parameter('max-upload-size', 10 * 1024 * 1024)  # 10MB
    
    @property
    def upload_url_expiry(self) -> int:
        """Get pre-signed upload URL expiry in seconds"""
        return self.get_int_parameter('upload-url-expiry', 300)  # 5 minutes
    
    @property
    def enable_debug_logging(self) -> bool:
        """Get debug logging flag"""
        return self.get_bool_parameter('enable-debug-logging', False)
    
    @property
    def public_endpoint(self) -> Optional[str]:
        """Public base URL of the bucket, used for direct links and as proxy source"""
        return self.get_parameter('r2-public-endpoint')
    
    def storage_settings(self) -> StorageSettings:
        """
        Build storage settings, failing closed when credentials are missing
        
        Raises:
            ConfigurationError: If any required storage key is unset
        """
        required = {
            'r2-endpoint': self.get_parameter('r2-endpoint'),
            'r2-access-key-id': self.get_parameter('r2-access-key-id'),
            'r2-secret-access-key': self.get_parameter('r2-secret-access-key'),
            'r2-bucket-name': self.get_parameter('r2-bucket-name'),
        }
        missing = [key for key, value in required.items() if not value]
        if missing:
            raise ConfigurationError(
                f"Object storage is not configured. Missing: {', '.join(missing)}",
                config_key=missing[0],
                config_source='environment'
            )
        
        return StorageSettings(
            endpoint=required['r2-endpoint'],
            access_key_id=required['r2-access-key-id'],
            secret_access_key=required['r2-secret-access-key'],
            bucket_name=required['r2-bucket-name'],
            region=self.get_parameter('r2-region', 'auto'),
            public_endpoint=self.public_endpoint
        )
    
    def imgproxy_settings(self) -> Optional[ImgproxySettings]:
        """
        Build image proxy settings, or None when signing is unavailable
        
        None means delivery URLs fall back to direct public links.
        """
        base_url = self.get_parameter('imgproxy-url')
        key_hex = self.get_parameter('imgproxy-key')
        salt_hex = self.get_parameter('imgproxy-salt')
        public_endpoint = self.public_endpoint
        
        if not (base_url and key_hex and salt_hex and public_endpoint):
            return None
        
        try:
            key = bytes.fromhex(key_hex)
            salt = bytes.fromhex(salt_hex)
        except ValueError:
            print("imgproxy key or salt is not valid hex, signing disabled")
            return None
        
        return ImgproxySettings(
            base_url=base_url,
            key=key,
            salt=salt,
            public_endpoint=public_endpoint
        )


# Global configuration instance
config = Config()
