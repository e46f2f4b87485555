# blog_cms/utils/storage.py
import os
from typing import BinaryIO, Optional

import boto3
from botocore.exceptions import ClientError
from flask import current_app


class BlobStore:
    """Byte storage for uploaded media. Keys are relative object paths."""

    def put(self, key: str, stream: BinaryIO, content_type: Optional[str] = None) -> str:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    def __init__(self, root: str, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def _path(self, key: str) -> str:
        return os.path.join(self.root, *key.split("/"))

    def put(self, key, stream, content_type=None):
        path = self._path(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        with open(path, "wb") as fh:
            fh.write(stream.read())

        return f"{self.base_url}/{key}"

    def delete(self, key):
        path = self._path(key)
        if not os.path.exists(path):
            return False

        os.remove(path)
        return True


class S3BlobStore(BlobStore):
    """
    S3-compatible storage (AWS S3, Cloudflare R2).

    Public URLs go through ``CDN_BASE_URL`` when configured.
    """

    def __init__(self, *, bucket, endpoint_url=None, region="auto",
                 access_key=None, secret_key=None, public_base_url=None):
        self.bucket = bucket
        self.public_base_url = (public_base_url or "").rstrip("/")
        self._s3 = boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )

    def put(self, key, stream, content_type=None):
        extra = {"ContentType": content_type} if content_type else {}
        self._s3.upload_fileobj(stream, self.bucket, key, ExtraArgs=extra)

        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return f"{self._s3.meta.endpoint_url}/{self.bucket}/{key}"

    def delete(self, key):
        try:
            self._s3.delete_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            code = (e.response.get("Error") or {}).get("Code")
            if code in ("404", "NoSuchKey", "NotFound"):
                return False
            raise


def init_blob_store(app):
    config = app.config

    if config.get("STORAGE_BACKEND") == "s3":
        if not config.get("S3_BUCKET"):
            raise RuntimeError("S3_BUCKET is not set")

        store = S3BlobStore(
            bucket=config["S3_BUCKET"],
            endpoint_url=config.get("S3_ENDPOINT_URL"),
            region=config.get("S3_REGION", "auto"),
            access_key=config.get("S3_ACCESS_KEY"),
            secret_key=config.get("S3_SECRET_KEY"),
            public_base_url=config.get("CDN_BASE_URL"),
        )
    else:
        root = config.get("UPLOAD_FOLDER", "uploads")
        if not os.path.isabs(root):
            root = os.path.join(app.instance_path, root)
        store = LocalBlobStore(root, config.get("MEDIA_BASE_URL", "/uploads"))

    app.extensions["blob_store"] = store
    return store


def get_blob_store() -> BlobStore:
    return current_app.extensions["blob_store"]
