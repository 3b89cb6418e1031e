from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    Configurações da aplicação.
    Carrega variáveis do arquivo .env automaticamente.
    """

    # Aplicação
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # LiraPay (vazio = não configurado, erro em tempo de requisição)
    LIRAPAY_API_SECRET: str = ""
    LIRAPAY_BASE_URL: str = "https://api.lirapaybr.com"
    LIRAPAY_TIMEOUT: float = 10.0

    # Checkout
    POLL_INTERVAL: float = 5.0
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Logs
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        """Converte string de CORS_ORIGINS em lista"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def webhook_url(self) -> str:
        """URL pública que a LiraPay chama ao mudar o status"""
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}/api/webhook"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Instância única das configurações
settings = Settings()
