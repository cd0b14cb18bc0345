from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


DEV_JWT_SECRET = "sua_chave_secreta_super_segura_aqui_mude_em_producao"


class Settings(BaseSettings):
    # Banco de dados
    db_url: str = Field("sqlite+aiosqlite:///./fastroute.sqlite3", alias="DB_URL")

    # JWT / senhas
    jwt_secret: str = Field(DEV_JWT_SECRET, alias="JWT_SECRET")
    jwt_alg: str = Field("HS256", alias="JWT_ALG")
    token_ttl_hours: int = Field(24, alias="TOKEN_TTL_HOURS")
    bcrypt_rounds: int = Field(12, alias="BCRYPT_ROUNDS")

    # Ambiente: em "production" os detalhes de erros internos não vão na resposta
    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    cors_origins: list[str] = Field(
        [
            "http://localhost:3000",
            "http://localhost:5173",
            "https://fastroute.netlify.app",
            "https://seu-app.vercel.app",
        ],
        alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,  # permite defaults se não houver variável de ambiente
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret == DEV_JWT_SECRET


settings = Settings()
