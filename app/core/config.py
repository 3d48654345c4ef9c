from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    database_url: str
    backend_cors_origins: str = "http://localhost:5173"
    sql_echo: bool = False
    log_level: str = "INFO"
    port: int = 3000
    seed_default_types: bool = True
    static_dir: Optional[str] = None

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.backend_cors_origins.split(",") if origin.strip()]
