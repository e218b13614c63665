"""
Object storage backed by an S3-compatible bucket (AWS S3, MinIO, LocalStack)
"""

from typing import IO, Iterator, Optional, Tuple
from datetime import datetime
from urllib.parse import quote

import boto3
from flask import current_app


class S3Storage:
    """
    Thin wrapper around a boto3 S3 client.
    Errors from botocore are not caught here, callers decide how to react.
    """

    VISIBILITY_ACL = {
        'public': 'public-read',
        'private': 'private',
    }

    def __init__(self, bucket: str, region: str = 'us-east-1', endpoint_url: Optional[str] = None,
                 public_url: Optional[str] = None, access_key_id: Optional[str] = None,
                 secret_access_key: Optional[str] = None, client=None):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url.rstrip('/') if endpoint_url else None
        self.public_url = public_url.rstrip('/') if public_url else None
        self.client = client or boto3.client(
            's3',
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    @classmethod
    def from_app_config(cls, app=None):
        """Create storage from Flask app configuration"""
        if app is None:
            app = current_app

        return cls(
            bucket=app.config['S3_BUCKET'],
            region=app.config.get('S3_REGION', 'us-east-1'),
            endpoint_url=app.config.get('S3_ENDPOINT_URL'),
            public_url=app.config.get('S3_PUBLIC_URL'),
            access_key_id=app.config.get('AWS_ACCESS_KEY_ID'),
            secret_access_key=app.config.get('AWS_SECRET_ACCESS_KEY'),
        )

    def put(self, key: str, stream: IO[bytes], content_type: Optional[str] = None) -> str:
        extra_args = {'ContentType': content_type} if content_type else {}
        self.client.upload_fileobj(stream, self.bucket, key, ExtraArgs=extra_args)
        return key

    def set_visibility(self, key: str, visibility: str) -> None:
        acl = self.VISIBILITY_ACL.get(visibility)
        if acl is None:
            raise ValueError(f"Unknown visibility '{visibility}'")
        self.client.put_object_acl(Bucket=self.bucket, Key=key, ACL=acl)

    def url(self, key: str) -> str:
        """Public (unsigned) URL of an object"""
        quoted_key = quote(key, safe='/')
        if self.public_url:
            return f"{self.public_url}/{quoted_key}"
        if self.endpoint_url:
            # Path-style addressing for MinIO / LocalStack
            return f"{self.endpoint_url}/{self.bucket}/{quoted_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quoted_key}"

    def delete(self, key: str) -> None:
        # S3 answers 204 whether or not the key existed
        self.client.delete_object(Bucket=self.bucket, Key=key)

    def list_objects(self, prefix: str = '') -> Iterator[Tuple[str, datetime]]:
        paginator = self.client.get_paginator('list_objects_v2')
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for item in page.get('Contents', []):
                yield item['Key'], item['LastModified']


def get_storage():
    """Storage configured for the current app"""
    return current_app.extensions['object_storage']
