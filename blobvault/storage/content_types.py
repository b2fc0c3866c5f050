"""
Content type inference from blob names.

The extension table is built once at import time and exposed read-only.
"""
from types import MappingProxyType

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = MappingProxyType({
    # Text
    ".txt": "text/plain",
    ".log": "text/plain",
    ".ini": "text/plain",
    ".conf": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".tsv": "text/tab-separated-values",
    ".htm": "text/html",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".xml": "text/xml",
    ".ics": "text/calendar",
    ".vtt": "text/vtt",
    # Application
    ".json": "application/json",
    ".map": "application/json",
    ".yaml": "application/x-yaml",
    ".yml": "application/x-yaml",
    ".pdf": "application/pdf",
    ".rtf": "application/rtf",
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".tgz": "application/gzip",
    ".tar": "application/x-tar",
    ".7z": "application/x-7z-compressed",
    ".rar": "application/vnd.rar",
    ".bz2": "application/x-bzip2",
    ".xz": "application/x-xz",
    ".wasm": "application/wasm",
    ".exe": "application/octet-stream",
    ".dll": "application/octet-stream",
    ".bin": "application/octet-stream",
    ".apk": "application/vnd.android.package-archive",
    ".jar": "application/java-archive",
    ".swf": "application/x-shockwave-flash",
    ".sql": "application/sql",
    ".doc": "application/msword",
    ".dot": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xls": "application/vnd.ms-excel",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".ppt": "application/vnd.ms-powerpoint",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".odt": "application/vnd.oasis.opendocument.text",
    ".ods": "application/vnd.oasis.opendocument.spreadsheet",
    ".odp": "application/vnd.oasis.opendocument.presentation",
    ".epub": "application/epub+zip",
    ".parquet": "application/vnd.apache.parquet",
    # Images
    ".bmp": "image/bmp",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
    ".jpe": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".heic": "image/heic",
    # Audio
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".mid": "audio/midi",
    ".midi": "audio/midi",
    ".mp3": "audio/mpeg",
    ".oga": "audio/ogg",
    ".ogg": "audio/ogg",
    ".wav": "audio/wav",
    ".weba": "audio/webm",
    # Video
    ".avi": "video/x-msvideo",
    ".flv": "video/x-flv",
    ".m4v": "video/mp4",
    ".mkv": "video/x-matroska",
    ".mov": "video/quicktime",
    ".mp4": "video/mp4",
    ".mpeg": "video/mpeg",
    ".mpg": "video/mpeg",
    ".ogv": "video/ogg",
    ".webm": "video/webm",
    ".wmv": "video/x-ms-wmv",
    # Fonts
    ".otf": "font/otf",
    ".ttf": "font/ttf",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
})


def infer_content_type(blob_name: str) -> str:
    """
    Infer the MIME type of a blob from its file extension.

    The lookup is case-insensitive and uses the last extension only
    ("archive.tar.gz" -> ".gz"). Unknown or missing extensions fall back
    to application/octet-stream.

    Args:
        blob_name: Name of the blob

    Returns:
        MIME content type string
    """
    base_name = blob_name.rsplit("/", 1)[-1]
    dot = base_name.rfind(".")
    # A leading dot marks a hidden file, not an extension
    if dot <= 0:
        return DEFAULT_CONTENT_TYPE
    return CONTENT_TYPES.get(base_name[dot:].lower(), DEFAULT_CONTENT_TYPE)
