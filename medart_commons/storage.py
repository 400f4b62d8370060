"""
S3-compatible storage client factory
"""
import boto3
from botocore.config import Config as BotoConfig
from .config import StorageSettings
from .constants import StorageConstants


def _restrict_signed_headers(request, signature_version=None, **kwargs):
    """
    Drop every header before a PutObject pre-sign

    The host header is derived from the URL, so it stays the only signed
    header. A content-type or checksum header signed here but not sent by
    the browser would fail the PUT.
    """
    if not (signature_version or '').endswith('-query'):
        return
    for header in list(request.headers.keys()):
        if header.lower() not in StorageConstants.SIGNED_HEADERS:
            del request.headers[header]


def create_storage_client(settings: StorageSettings):
    """
    Create a boto3 S3 client for the configured object store
    
    Checksum calculation is limited to operations that require it, so
    pre-signed PUT URLs never carry an x-amz-checksum parameter.
    """
    client = boto3.client(
        's3',
        endpoint_url=settings.endpoint,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        region_name=settings.region or StorageConstants.DEFAULT_REGION,
        config=BotoConfig(
            signature_version=StorageConstants.SIGNATURE_VERSION,
            s3={'addressing_style': 'path'},
            request_checksum_calculation='when_required',
            response_checksum_validation='when_required'
        )
    )
    client.meta.events.register('before-sign.s3.PutObject', _restrict_signed_headers)
    return client
