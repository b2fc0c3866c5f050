class URLs:
    CONTAINER = "/api/v1/blobs/{}"
    BLOB = "/api/v1/blobs/{}/{}"
    BLOB_INFO = "/api/v1/blobs/{}/{}/info"
    BLOB_URL = "/api/v1/blobs/{}/{}/url"
