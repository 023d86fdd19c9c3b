from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import os


class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_schema: str = "public"

    # Search index
    elasticsearch_url: str = "http://localhost:9200"
    elasticsearch_index: str = "products"
    elasticsearch_username: Optional[str] = None
    elasticsearch_password: Optional[str] = None
    elasticsearch_timeout: float = 5.0

    # Pagination
    default_page_size: int = 15
    max_page_size: int = 100

    def clamp_page_size(self, page_size: Optional[int]) -> int:
        """Fall back to the default page size and cap it at max_page_size."""
        if not page_size or page_size < 1:
            return self.default_page_size
        return min(page_size, self.max_page_size)

    model_config = SettingsConfigDict(
        env_file=f"config/{os.getenv('ENV', 'local')}.env",
        case_sensitive=False,
    )


settings = Settings()
