"""
PynamoDB model for uploaded image metadata
"""
from datetime import datetime, timezone
from typing import Dict, Optional, Any
from pynamodb.models import Model
from pynamodb.attributes import UnicodeAttribute, UTCDateTimeAttribute, NumberAttribute
from pynamodb.exceptions import DoesNotExist
from ..config import config
from ..constants import ImageConstants
from ..logger import upload_logger as logger
from ..error_handler import error_handler


class ImageRecord(Model):
    """
    Metadata for one uploaded original
    
    Created as 'pending' when an upload URL is issued and flipped to
    'uploaded' once the object is confirmed in storage.
    """
    
    class Meta:
        table_name = config.image_table_name
        region = config.aws_region
        billing_mode = 'PAY_PER_REQUEST'
    
    image_id = UnicodeAttribute(hash_key=True)
    owner_id = UnicodeAttribute()
    object_key = UnicodeAttribute(attr_name='key')
    
    filename = UnicodeAttribute()
    content_type = UnicodeAttribute()
    size = NumberAttribute()
    width = NumberAttribute(null=True)
    height = NumberAttribute(null=True)
    
    status = UnicodeAttribute(default=ImageConstants.STATUS_PENDING)
    
    created_at = UTCDateTimeAttribute(default=lambda: datetime.now(timezone.utc))
    updated_at = UTCDateTimeAttribute(default=lambda: datetime.now(timezone.utc))
    uploaded_at = UTCDateTimeAttribute(null=True)
    
    @property
    def is_uploaded(self) -> bool:
        return self.status == ImageConstants.STATUS_UPLOADED
    
    @classmethod
    def create_image(cls, image_data: Dict[str, Any]) -> 'ImageRecord':
        """
        Create a pending image record
        
        The write is conditional on the id being unused, so an id is never
        attached to a second upload.
        
        Args:
            image_data: id, owner_id, key, filename, content_type, size,
                        and optional width/height
            
        Returns:
            Created ImageRecord instance
            
        Raises:
            ValueError: If required fields are missing
            MediaServiceError: If the database write fails
        """
        required_fields = ['id', 'owner_id', 'key', 'filename', 'content_type', 'size']
        missing_fields = [field for field in required_fields if image_data.get(field) is None]
        
        if missing_fields:
            raise ValueError(f"Missing required fields: {missing_fields}")
        
        image = cls(
            image_id=image_data['id'],
            owner_id=image_data['owner_id'],
            object_key=image_data['key'],
            filename=image_data['filename'],
            content_type=image_data['content_type'],
            size=image_data['size'],
            width=image_data.get('width'),
            height=image_data.get('height')
        )
        
        try:
            image.save(condition=cls.image_id.does_not_exist())
        except Exception as e:
            logger.log_database_operation(
                table_name=cls.Meta.table_name,
                operation='create',
                success=False,
                image_id=image.image_id,
                error_type=type(e).__name__
            )
            raise error_handler.classify(e, 'create_image', service='database') from e
        
        logger.log_database_operation(
            table_name=cls.Meta.table_name,
            operation='create',
            success=True,
            image_id=image.image_id,
            owner_id=image.owner_id
        )
        
        return image
    
    @classmethod
    def get_image(cls, image_id: str) -> Optional['ImageRecord']:
        """
        Get image record by ID
        
        Returns:
            ImageRecord instance or None if not found
        """
        try:
            return cls.get(image_id)
        except DoesNotExist:
            logger.log_database_operation(
                table_name=cls.Meta.table_name,
                operation='get',
                success=True,
                image_id=image_id,
                found=False
            )
            return None
        except Exception as e:
            raise error_handler.classify(e, 'get_image', service='database') from e
    
    def mark_uploaded(self, size: int, width: Optional[int] = None, height: Optional[int] = None) -> 'ImageRecord':
        """
        Record that the original is present in storage
        
        Args:
            size: Stored object size in bytes
            width: Pixel width, kept from the record when None
            height: Pixel height, kept from the record when None
        """
        now = datetime.now(timezone.utc)
        actions = [
            ImageRecord.status.set(ImageConstants.STATUS_UPLOADED),
            ImageRecord.size.set(size),
            ImageRecord.uploaded_at.set(now),
            ImageRecord.updated_at.set(now),
        ]
        if width is not None:
            actions.append(ImageRecord.width.set(width))
        if height is not None:
            actions.append(ImageRecord.height.set(height))
        
        try:
            self.update(actions=actions)
        except Exception as e:
            logger.log_database_operation(
                table_name=self.Meta.table_name,
                operation='update',
                success=False,
                image_id=self.image_id,
                error_type=type(e).__name__
            )
            raise error_handler.classify(e, 'mark_uploaded', service='database') from e
        
        logger.log_database_operation(
            table_name=self.Meta.table_name,
            operation='update',
            success=True,
            image_id=self.image_id,
            status=self.status
        )
        
        return self
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert record to its API representation"""
        data = {
            'id': self.image_id,
            'key': self.object_key,
            'filename': self.filename,
            'contentType': self.content_type,
            'size': self.size,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        
        if self.width is not None:
            data['width'] = self.width
        if self.height is not None:
            data['height'] = self.height
        if self.uploaded_at:
            data['uploadedAt'] = self.uploaded_at.isoformat()
        
        return data
