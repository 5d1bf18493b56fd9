from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Export storage
    STORAGE_BACKEND: str = "local"  # local | object
    LOCAL_EXPORT_ROOT: str = "public/exports"
    EXPORT_URL_PREFIX: str = "/exports"

    # Object Storage (S3 compatible)
    OBJECT_STORAGE_ENDPOINT: str | None = None
    OBJECT_STORAGE_BUCKET: str | None = None
    OBJECT_STORAGE_PUBLIC_BASE_URL: str | None = None
    # DB bootstrap (dev only)
    AUTO_DB_BOOTSTRAP: bool = False
    SEED_USERS: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
