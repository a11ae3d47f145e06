from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 데이터베이스 (SQLite 파일 하나)
    database_url: str = "sqlite:///drafts.db"

    # OpenRouter (AI Enhance) 설정
    # 키가 없어도 서버는 뜨고, /api/enhance 호출 시점에만 실패합니다.
    openrouter_api_key: str = ""
    openrouter_model: str = "tngtech/deepseek-r1t2-chimera:free"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    enhance_timeout_seconds: float = 60.0

    # 서버 설정
    host: str = ""
    port: int = 3001
    cors_origin: str = "*"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
