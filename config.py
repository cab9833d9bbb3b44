import os

from dotenv import load_dotenv

# credentials usually live in a local .env file
load_dotenv()


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "a-hard-to-guess-string"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    CACHE_TYPE = "SimpleCache"
    SWAGGER = {"title": "Prompt Garden API", "uiversion": 3, "specs_route": "/api/docs/"}
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Google Sheets backend. Either point at a service account JSON file or
    # provide the email/private key pair directly (escaped newlines allowed).
    GOOGLE_SHEET_ID = os.environ.get("GOOGLE_SHEET_ID")
    GOOGLE_SERVICE_ACCOUNT_FILE = os.environ.get("GOOGLE_SERVICE_ACCOUNT_FILE")
    GOOGLE_SERVICE_ACCOUNT_EMAIL = os.environ.get("GOOGLE_SERVICE_ACCOUNT_EMAIL")
    GOOGLE_PRIVATE_KEY = os.environ.get("GOOGLE_PRIVATE_KEY")
    SHEETS_API_URL = os.environ.get("SHEETS_API_URL", "https://sheets.googleapis.com/v4")
    try:
        SHEETS_TIMEOUT = int(os.environ.get("SHEETS_TIMEOUT", "15"))
    except Exception:
        SHEETS_TIMEOUT = 15

    # Seconds the prompt/tag listings stay cached between mutations.
    try:
        PROMPTS_CACHE_TIMEOUT = int(os.environ.get("PROMPTS_CACHE_TIMEOUT", "60"))
    except Exception:
        PROMPTS_CACHE_TIMEOUT = 60


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    GOOGLE_SHEET_ID = "test-sheet"
    GOOGLE_SERVICE_ACCOUNT_EMAIL = "tester@example.iam.gserviceaccount.com"
    GOOGLE_PRIVATE_KEY = None
    GOOGLE_SERVICE_ACCOUNT_FILE = None


class ProductionConfig(Config):
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
