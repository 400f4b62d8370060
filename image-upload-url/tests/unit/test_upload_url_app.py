"""
Unit tests for the image upload URL Lambda function
"""
import importlib.util
import json
import os
from urllib.parse import urlparse, parse_qs

import pytest
from botocore.exceptions import ClientError

from medart_commons.services.service_container import register_service
from medart_commons.services.upload_service import UploadService
from medart_commons.storage import create_storage_client


APP_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), 'app.py')
_spec = importlib.util.spec_from_file_location('image_upload_url_app', APP_PATH)
app = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(app)


class TestUploadUrlHandler:
    """Test cases for the upload URL handler"""
    
    @pytest.fixture
    def event(self, api_gateway_event):
        def build(**body):
            api_gateway_event['body'] = json.dumps(body)
            return api_gateway_event
        return build
    
    @pytest.fixture(autouse=True)
    def upload_service(self, storage_settings, mock_image_store):
        service = UploadService(
            storage_settings,
            storage_client=create_storage_client(storage_settings),
            image_store=mock_image_store
        )
        register_service('upload_service', service)
        return service
    
    def test_issues_grant(self, event, lambda_context):
        response = app.lambda_handler(
            event(filename='photo.PNG', contentType='image/png', fileSize=1024),
            lambda_context
        )
        
        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert set(body) == {'id', 'key', 'uploadUrl'}
        assert body['key'] == f"users/u1/images/{body['id']}/original.PNG"
        query = parse_qs(urlparse(body['uploadUrl']).query)
        assert query['X-Amz-SignedHeaders'] == ['host']
        assert query['X-Amz-Expires'] == ['300']
    
    def test_passes_client_dimensions(self, event, lambda_context, mock_image_store):
        app.lambda_handler(
            event(filename='a.png', contentType='image/png', fileSize=10, width=300, height=200),
            lambda_context
        )
        
        record = mock_image_store.create_image.call_args[0][0]
        assert (record['width'], record['height']) == (300, 200)
    
    def test_requires_authentication(self, anonymous_event, lambda_context, mock_image_store):
        anonymous_event['body'] = json.dumps({'filename': 'a.png', 'contentType': 'image/png', 'fileSize': 10})
        
        response = app.lambda_handler(anonymous_event, lambda_context)
        
        assert response['statusCode'] == 401
        mock_image_store.create_image.assert_not_called()
    
    def test_missing_fields(self, event, lambda_context):
        response = app.lambda_handler(event(filename='a.png'), lambda_context)
        
        assert response['statusCode'] == 400
        assert json.loads(response['body'])['missing_fields'] == ['contentType', 'fileSize']
    
    def test_invalid_json(self, api_gateway_event, lambda_context):
        api_gateway_event['body'] = 'filename=a.png'
        
        assert app.lambda_handler(api_gateway_event, lambda_context)['statusCode'] == 400
    
    def test_filename_with_path(self, event, lambda_context, mock_image_store):
        response = app.lambda_handler(
            event(filename='photo.png/../x', contentType='image/png', fileSize=10),
            lambda_context
        )
        
        assert response['statusCode'] == 400
        assert json.loads(response['body'])['field'] == 'filename'
        mock_image_store.create_image.assert_not_called()
    
    def test_non_image(self, event, lambda_context, mock_image_store):
        response = app.lambda_handler(
            event(filename='a.pdf', contentType='application/pdf', fileSize=10),
            lambda_context
        )
        
        assert response['statusCode'] == 400
        assert json.loads(response['body'])['error'] == 'Only image files are allowed'
        mock_image_store.create_image.assert_not_called()
    
    def test_too_large(self, event, lambda_context):
        response = app.lambda_handler(
            event(filename='a.png', contentType='image/png', fileSize=10 * 1024 * 1024 + 1),
            lambda_context
        )
        
        assert response['statusCode'] == 400
        assert '10MB' in json.loads(response['body'])['error']
    
    def test_provider_failure_is_generic(self, event, lambda_context, storage_settings, mock_storage_client):
        mock_storage_client.generate_presigned_url.side_effect = ClientError(
            {'Error': {'Code': 'InvalidAccessKeyId', 'Message': 'The key test-access-key is unknown'}},
            'PutObject'
        )
        register_service('upload_service', UploadService(storage_settings, storage_client=mock_storage_client))
        
        response = app.lambda_handler(
            event(filename='a.png', contentType='image/png', fileSize=10),
            lambda_context
        )
        body = json.loads(response['body'])
        
        assert response['statusCode'] == 500
        assert body['error'] == 'Failed to generate upload URL'
        assert body['retryable'] is False
        assert 'InvalidAccessKeyId' not in response['body']
        assert 'test-access-key' not in response['body']
    
    def test_throttled_provider_is_retryable(self, event, lambda_context, storage_settings, mock_storage_client):
        mock_storage_client.generate_presigned_url.side_effect = ClientError(
            {'Error': {'Code': 'SlowDown', 'Message': 'Reduce your request rate'}},
            'PutObject'
        )
        register_service('upload_service', UploadService(storage_settings, storage_client=mock_storage_client))
        
        response = app.lambda_handler(
            event(filename='a.png', contentType='image/png', fileSize=10),
            lambda_context
        )
        
        assert response['statusCode'] == 500
        assert json.loads(response['body'])['retryable'] is True
