import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

DEV_ACCESS_TOKEN_SECRET = "DEV_JWT_SECRET_REPLACE_ME"
DEV_REFRESH_TOKEN_SECRET = "DEV_REFRESH_SECRET_REPLACE_ME"


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./cms_auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))

    # Access and refresh tokens are signed with separate secrets
    ACCESS_TOKEN_SECRET = data.get(
        "ACCESS_TOKEN_SECRET", os.environ.get("JWT_SECRET", DEV_ACCESS_TOKEN_SECRET)
    )
    REFRESH_TOKEN_SECRET = data.get(
        "REFRESH_TOKEN_SECRET",
        os.environ.get("REFRESH_TOKEN_SECRET", DEV_REFRESH_TOKEN_SECRET),
    )
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 7))

    # Argon2id cost parameters (memory cost in KiB)
    ARGON2_TIME_COST = int(data.get("ARGON2_TIME_COST", 3))
    ARGON2_MEMORY_COST = int(data.get("ARGON2_MEMORY_COST", 2**16))
    ARGON2_PARALLELISM = int(data.get("ARGON2_PARALLELISM", 1))
