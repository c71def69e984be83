from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "password_lab"
    db_user: str = "postgres"
    db_password: str = "change-me-in-production"
    # bcrypt.gensalt only accepts costs 4 to 31.
    bcrypt_rounds: int = Field(10, ge=4, le=31)
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    class Config:
        env_prefix = "PASSLAB_"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()
