"""
Cloud AWS S3 Provider

Implements the ObjectStore protocol on top of Amazon S3.
"""
import logging
from typing import BinaryIO, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from relay.errors import StorageError
from relay.models import StoredObject

logger = logging.getLogger(__name__)


CONTENT_TYPES = {
    'mp3': 'audio/mpeg',
    'ogg': 'audio/ogg',
    'pcm': 'audio/pcm',
    'txt': 'text/plain; charset=utf-8',
}


class CloudAWSS3Provider:
    """
    Stores objects with S3 PutObject.

    The bucket is assumed to exist and be writable; it is never created or
    checked during a run. Existing keys are overwritten.
    """

    def __init__(self, client):
        self.client = client

    def put(
        self,
        bucket: str,
        key: str,
        content: BinaryIO,
        content_type: Optional[str] = None,
    ) -> StoredObject:
        request = {'Bucket': bucket, 'Key': key, 'Body': content}
        content_type = content_type or self.guess_content_type(key)
        if content_type:
            request['ContentType'] = content_type

        try:
            response = self.client.put_object(**request)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"S3 upload of s3://{bucket}/{key} failed: {e}", cause=e) from e

        logger.info(f"Uploaded file to S3: {key}")
        return StoredObject(bucket=bucket, key=key, etag=response.get('ETag'))

    @staticmethod
    def guess_content_type(key: str) -> Optional[str]:
        extension = key.rsplit('.', 1)[-1].lower() if '.' in key else ''
        return CONTENT_TYPES.get(extension)

    def validate_requirements(self, bucket: Optional[str] = None) -> List[str]:
        """Check that the bucket is reachable with the current credentials."""
        if not bucket:
            return ["No S3 bucket configured"]
        try:
            self.client.head_bucket(Bucket=bucket)
        except (ClientError, BotoCoreError) as e:
            return [f"S3 bucket '{bucket}' is not accessible: {e}"]
        return []

    def get_engine_info(self) -> Tuple[str, str]:
        return ("cloud-aws-s3", self.client.meta.region_name)
