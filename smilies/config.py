from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    STORAGE_BACKEND: str = "local"  # azure | local | memory
    AZURE_STORAGE_CONNECTION_STRING: str = ""
    STORAGE_CONTAINER_NAME: str = "smilies"
    LOCAL_STORAGE_PATH: str = "smilies/storage/data"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Upload settings
    MAX_UPLOAD_SIZE_MB: int = 10
    ALLOWED_UPLOAD_EXTENSIONS: list[str] = [".txt", ".jpg", ".png"]

    # Logging settings
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING | ERROR

    # Read from .env as well as the process environment; unknown variables are ignored
    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
