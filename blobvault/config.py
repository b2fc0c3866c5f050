from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    STORAGE_PROVIDER: str = "local"  # local | remote providers plug in here
    STORAGE_ROOT_PATH: str = "data/blobs"
    STORAGE_ROOT_URL: str = "/api/v1/blobs"
    STORAGE_CHUNK_SIZE_KB: int = 64

    # Logging settings
    LOG_LEVEL: str = "INFO"

    # Read from .env, ignore variables this class does not declare
    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
