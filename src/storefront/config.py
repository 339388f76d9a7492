"""Application settings read from the environment."""

import os


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Storefront API")
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    TOKEN_LIFETIME_MINUTES: int = int(os.getenv("TOKEN_LIFETIME_MINUTES", "60"))
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]


settings = Settings()
