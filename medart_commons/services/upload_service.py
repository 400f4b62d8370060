"""
Upload service
Issues short-lived pre-signed PUT URLs and tracks the resulting image records
"""
import uuid
from typing import Optional
from botocore.exceptions import ClientError, BotoCoreError

from ..config import StorageSettings
from ..constants import ImageConstants, TimeConstants, ErrorConstants
from ..contracts import UploadGrant
from ..error_handler import error_handler
from ..exceptions import ValidationError, PayloadTooLargeError, NotFoundError
from ..logger import upload_logger as logger
from ..models.image import ImageRecord
from ..processors.image import image_processor
from ..storage import create_storage_client
from ..utils import generate_storage_key


class UploadService:
    """
    Upload URL issuer
    
    The browser uploads straight to object storage with the returned URL;
    this service only signs and records.
    """
    
    def __init__(
        self,
        settings: StorageSettings,
        storage_client=None,
        image_store=ImageRecord,
        record_metadata: bool = True,
        max_file_size: int = ImageConstants.MAX_FILE_SIZE,
        expires_in: int = TimeConstants.UPLOAD_URL_EXPIRY,
        processor=image_processor
    ):
        self.settings = settings
        self.bucket_name = settings.bucket_name
        self.storage_client = storage_client or create_storage_client(settings)
        self.image_store = image_store
        self.record_metadata = record_metadata
        self.max_file_size = max_file_size
        self.expires_in = expires_in
        self.processor = processor
    
    def validate_upload(self, content_type: str, file_size: int):
        """
        Reject uploads before any storage or database call
        
        Raises:
            ValidationError: Non-image content type or non-positive size
            PayloadTooLargeError: Size above the configured maximum
        """
        if not isinstance(content_type, str) or not content_type.startswith(ImageConstants.IMAGE_MIME_PREFIX):
            raise ValidationError(ErrorConstants.ONLY_IMAGES_ALLOWED, field='contentType', value=content_type)
        
        if isinstance(file_size, bool) or not isinstance(file_size, int) or file_size <= 0:
            raise ValidationError(ErrorConstants.FILE_SIZE_NOT_POSITIVE, field='fileSize')
        
        if file_size > self.max_file_size:
            raise PayloadTooLargeError(
                ErrorConstants.FILE_TOO_LARGE.format(limit_mb=self.max_file_size // (1024 * 1024)),
                max_size=self.max_file_size,
                actual_size=file_size
            )
    
    def _presign_put(self, key: str, content_type: str) -> str:
        return self.storage_client.generate_presigned_url(
            'put_object',
            Params={
                'Bucket': self.bucket_name,
                'Key': key,
                'ContentType': content_type
            },
            ExpiresIn=self.expires_in
        )
    
    def create_upload_grant(
        self,
        owner_id: str,
        filename: str,
        content_type: str,
        file_size: int,
        width: Optional[int] = None,
        height: Optional[int] = None
    ) -> UploadGrant:
        """
        Issue a pre-signed PUT URL for a new original
        
        Args:
            owner_id: Verified caller identity
            filename: Client filename, its extension is kept in the key
            content_type: MIME type, must be image/*
            file_size: Declared size in bytes
            width: Optional pixel width reported by the client
            height: Optional pixel height reported by the client
            
        Returns:
            UploadGrant with image id, storage key and upload URL
            
        Raises:
            ValidationError, PayloadTooLargeError: Bad input
            AuthenticationError, ConfigurationError, UnavailableError: Provider failure
        """
        self.validate_upload(content_type, file_size)
        
        image_id = str(uuid.uuid4())
        key = generate_storage_key(owner_id, image_id, filename)
        
        logger.log_service_operation(
            "create_upload_grant",
            owner_id=owner_id,
            image_id=image_id,
            content_type=content_type,
            file_size=file_size
        )
        
        try:
            upload_url = self._presign_put(key, content_type)
        except (ClientError, BotoCoreError) as e:
            logger.log_storage_operation(self.bucket_name, 'presign_put', key, success=False)
            raise error_handler.classify(e, 'presign_put') from e
        
        logger.log_storage_operation(
            self.bucket_name, 'presign_put', key, expires_in=self.expires_in
        )
        
        if self.record_metadata:
            self.image_store.create_image({
                'id': image_id,
                'owner_id': owner_id,
                'key': key,
                'filename': filename,
                'content_type': content_type,
                'size': file_size,
                'width': width,
                'height': height
            })
        
        return UploadGrant(image_id=image_id, key=key, upload_url=upload_url)
    
    def confirm_upload(self, owner_id: str, image_id: str):
        """
        Verify the original landed in storage and mark its record uploaded
        
        The stored object must still be an image within the size limit.
        Missing width/height are read from the stored image header.
        Already-confirmed records are returned unchanged.
        
        Raises:
            NotFoundError: Unknown image, foreign owner, or object never uploaded
            PayloadTooLargeError: Stored object above the size limit
            ValidationError: Stored object is not an image
        """
        logger.log_service_operation("confirm_upload", owner_id=owner_id, image_id=image_id)
        
        record = self.image_store.get_image(image_id)
        if record is None or record.owner_id != owner_id:
            raise NotFoundError('image', image_id)
        
        if record.is_uploaded:
            return record
        
        key = record.object_key
        
        try:
            head = self.storage_client.head_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            status = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            code = e.response.get('Error', {}).get('Code')
            if status == 404 or code in ('404', 'NoSuchKey', 'NotFound'):
                logger.log_storage_operation(self.bucket_name, 'head_object', key, success=False, found=False)
                raise NotFoundError('upload', image_id) from e
            raise error_handler.classify(e, 'head_object') from e
        except BotoCoreError as e:
            raise error_handler.classify(e, 'head_object') from e
        
        stored_size = head.get('ContentLength', record.size)
        stored_type = head.get('ContentType') or record.content_type
        self._check_stored_object(key, stored_size, stored_type)
        
        width, height = record.width, record.height
        
        if width is None or height is None:
            dimensions = self._read_stored_dimensions(key)
            if dimensions:
                width, height = dimensions
        
        return record.mark_uploaded(stored_size, width=width, height=height)
    
    def _check_stored_object(self, key: str, stored_size: int, stored_type: str):
        """
        Re-apply the upload limits to what actually landed in storage
        
        The pre-signed PUT binds neither size nor content type, so the
        declared values checked at grant time are not trusted here.
        """
        if stored_size > self.max_file_size:
            logger.warning("Stored object exceeds upload limit",
                           object_key=key, size=stored_size, max_size=self.max_file_size)
            raise PayloadTooLargeError(
                ErrorConstants.FILE_TOO_LARGE.format(limit_mb=self.max_file_size // (1024 * 1024)),
                max_size=self.max_file_size,
                actual_size=stored_size
            )
        
        if not (stored_type or '').startswith(ImageConstants.IMAGE_MIME_PREFIX):
            logger.warning("Stored object is not an image", object_key=key, content_type=stored_type)
            raise ValidationError(ErrorConstants.ONLY_IMAGES_ALLOWED, field='contentType', value=stored_type)
    
    def _read_stored_dimensions(self, key: str):
        try:
            # The header is enough for Pillow to report dimensions
            response = self.storage_client.get_object(
                Bucket=self.bucket_name,
                Key=key,
                Range=f"bytes=0-{ImageConstants.HEADER_READ_BYTES - 1}"
            )
            data = response['Body'].read()
        except (ClientError, BotoCoreError) as e:
            raise error_handler.classify(e, 'get_object') from e
        
        logger.log_storage_operation(self.bucket_name, 'get_object', key, size=len(data))
        return self.processor.read_dimensions(data)
