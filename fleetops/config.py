"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "FleetOps Admin"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./fleetops.db"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_EXPORT: str = "10/minute"

    # Fuseau horaire du "jour courant" pour la facturation /
    # Timezone of the billing "current day"
    TIMEZONE: str = "America/Sao_Paulo"

    # Paramètres par défaut / Default parameters
    DEFAULT_HOURS_PER_DAY: int = 8

    # Charger la flotte initiale au premier démarrage / Seed initial fleet on first startup
    SEED_VEHICLES: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
