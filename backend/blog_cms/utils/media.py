import os
import time
import uuid
from typing import Optional

from werkzeug.utils import secure_filename

IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
}

DOCUMENT_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "svg"}
VIDEO_EXTENSIONS = {"mp4", "webm", "mov", "avi"}
DOCUMENT_EXTENSIONS = {"pdf", "doc", "docx", "xls", "xlsx"}

MEDIA_TYPE_EXTENSIONS = {
    "image": IMAGE_EXTENSIONS,
    "video": VIDEO_EXTENSIONS,
    "document": DOCUMENT_EXTENSIONS,
}

# Upload kind -> (accepted MIME types, storage folder)
UPLOAD_KINDS = {
    "content": (IMAGE_MIME_TYPES, "blog/images"),
    "featured": (IMAGE_MIME_TYPES, "blog/featured"),
    "document": (IMAGE_MIME_TYPES | DOCUMENT_MIME_TYPES, "blog/docs"),
}

MAX_FILES_PER_UPLOAD = 10


def file_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def allowed_mime(kind: str, mimetype: Optional[str]) -> bool:
    accepted, _ = UPLOAD_KINDS[kind]
    return (mimetype or "").lower() in accepted


def storage_key(kind: str, filename: str, prefix: Optional[str] = None) -> str:
    """
    Build a collision-free object key inside the folder for ``kind``.

    Featured images are prefixed with the owning post slug (or ``draft``).
    """
    _, folder = UPLOAD_KINDS[kind]
    safe = secure_filename(filename) or "file"
    stem, _ = os.path.splitext(safe)
    ext = file_extension(safe)
    unique = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"

    if kind == "featured":
        name = f"{prefix or 'draft'}-{unique}"
    else:
        name = f"{stem}-{unique}"

    return f"{folder}/{name}.{ext}" if ext else f"{folder}/{name}"


def format_file_size(size: Optional[int]) -> str:
    if size is None:
        return "Unknown"
    if size == 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB", "TB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1

    return f"{round(value, 2):g} {units[index]}"


def is_image(filename: Optional[str]) -> bool:
    return file_extension(filename) in IMAGE_EXTENSIONS


def is_video(filename: Optional[str]) -> bool:
    return file_extension(filename) in VIDEO_EXTENSIONS


def is_document(filename: Optional[str]) -> bool:
    return file_extension(filename) in DOCUMENT_EXTENSIONS
