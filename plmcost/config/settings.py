from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    narrative_model: str = ""
    history_dir: str = ".plmcost"
    history_limit: int = 10
    max_sessions: int = 100
    cors_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
