# config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///flori_si_frunze.db"

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8001
    APP_THREADS: int = 4
    LOG_LEVEL: str = "INFO"
    SITE_URL: str = "http://localhost:8001"

    # Bootstrap admin, created when the users table is empty
    DEFAULT_ADMIN_NAME: str = "Admin User"
    DEFAULT_ADMIN_EMAIL: str = "admin@example.com"
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "password123"

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""

    SUPERVISOR_RESTART_DELAY: float = 5.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def constructed_database_url(self) -> str:
        # Heroku/Render style URLs still use the old scheme name
        if self.DATABASE_URL.startswith("postgres://"):
            return "postgresql+psycopg2://" + self.DATABASE_URL[len("postgres://"):]
        return self.DATABASE_URL

settings = Settings()

class Config:
    SQLALCHEMY_DATABASE_URI = settings.constructed_database_url
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = settings.SECRET_KEY
    ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    LOG_LEVEL = settings.LOG_LEVEL
    SITE_URL = settings.SITE_URL
    DEFAULT_ADMIN = {
        'name': settings.DEFAULT_ADMIN_NAME,
        'email': settings.DEFAULT_ADMIN_EMAIL,
        'username': settings.DEFAULT_ADMIN_USERNAME,
        'password': settings.DEFAULT_ADMIN_PASSWORD,
    }
    CLOUDINARY = {
        'cloud_name': settings.CLOUDINARY_CLOUD_NAME,
        'api_key': settings.CLOUDINARY_API_KEY,
        'api_secret': settings.CLOUDINARY_API_SECRET,
    }
    MEDIA_FOLDER = 'media'
