"""
Pytest configuration and fixtures for the media service tests
Provides AWS mocking and common test data
"""
import io
import json
import os
import pytest
from moto import mock_aws
from unittest.mock import MagicMock
from PIL import Image


# Set test environment variables before any medart_commons import
os.environ.update({
    'AWS_DEFAULT_REGION': 'us-east-1',
    'AWS_ACCESS_KEY_ID': 'testing',
    'AWS_SECRET_ACCESS_KEY': 'testing',
    'AWS_SECURITY_TOKEN': 'testing',
    'AWS_SESSION_TOKEN': 'testing',
    'ENVIRONMENT': 'test',
    'PARAMETER_STORE_ENABLED': 'false',
    'IMAGE_TABLE_NAME': 'Images-test',
})


TEST_IMGPROXY_KEY_HEX = '943b421c9eb07c830af81030552c86009268de4e532ba2ee2eab8247c6da0881'
TEST_IMGPROXY_SALT_HEX = '520f986b998545b4785e0defbc4f3c1203f22de2374a3d53cb7a7fe9fea309c5'


@pytest.fixture
def lambda_context():
    """Mock Lambda context"""
    context = MagicMock()
    context.function_name = 'test-function'
    context.function_version = '$LATEST'
    context.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:test-function'
    context.memory_limit_in_mb = 128
    context.aws_request_id = 'test-request-id'
    return context


@pytest.fixture
def api_gateway_event():
    """Mock API Gateway proxy event from an authenticated caller"""
    return {
        'httpMethod': 'POST',
        'path': '/test',
        'resource': '/test',
        'requestContext': {
            'accountId': '123456789012',
            'apiId': 'test-api',
            'stage': 'test',
            'requestId': 'test-request-id',
            'identity': {
                'sourceIp': '127.0.0.1'
            },
            'authorizer': {
                'claims': {
                    'sub': 'u1',
                    'email': 'artist@example.com'
                }
            }
        },
        'headers': {
            'Content-Type': 'application/json'
        },
        'queryStringParameters': None,
        'pathParameters': None,
        'body': json.dumps({}),
        'isBase64Encoded': False
    }


@pytest.fixture
def anonymous_event(api_gateway_event):
    """API Gateway event with no authorizer context"""
    api_gateway_event['requestContext'].pop('authorizer')
    return api_gateway_event


@pytest.fixture
def storage_settings():
    from medart_commons.config import StorageSettings
    return StorageSettings(
        endpoint='https://account.r2.cloudflarestorage.com',
        access_key_id='test-access-key',
        secret_access_key='test-secret-key',
        bucket_name='medart-images-test',
        region='auto',
        public_endpoint='https://images.example.com'
    )


@pytest.fixture
def imgproxy_settings():
    from medart_commons.config import ImgproxySettings
    return ImgproxySettings(
        base_url='https://imgproxy.example.com',
        key=bytes.fromhex(TEST_IMGPROXY_KEY_HEX),
        salt=bytes.fromhex(TEST_IMGPROXY_SALT_HEX),
        public_endpoint='https://images.example.com'
    )


@pytest.fixture
def image_table():
    """Moto-backed image metadata table"""
    with mock_aws():
        from medart_commons.models.image import ImageRecord
        ImageRecord.create_table(wait=True)
        yield ImageRecord


@pytest.fixture
def sample_png_bytes():
    """A small PNG image"""
    image = Image.new('RGB', (120, 80), color='white')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def mock_storage_client():
    """MagicMock S3 client for asserting storage calls"""
    client = MagicMock()
    client.generate_presigned_url.return_value = 'https://account.r2.cloudflarestorage.com/medart-images-test/key?X-Amz-Expires=300'
    return client


@pytest.fixture
def mock_image_store():
    """MagicMock stand-in for the ImageRecord model class"""
    return MagicMock()


@pytest.fixture(autouse=True)
def reset_service_container():
    """Drop cached services between tests"""
    from medart_commons.services.service_container import clear_services
    clear_services()
    yield
    clear_services()
