from dotenv import load_dotenv
import os


load_dotenv(dotenv_path="credentials.env")

POSTGRES_USER = os.getenv("POSTGRES_USER")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD")
POSTGRES_DB = os.getenv("POSTGRES_DB")
POSTGRES_HOST = os.getenv("POSTGRES_HOST")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")

# Ưu tiên DATABASE_URL, sau đó Postgres, cuối cùng là SQLite cục bộ
if os.getenv("DATABASE_URL"):
    DATABASE_URL = os.getenv("DATABASE_URL")
elif POSTGRES_HOST:
    DATABASE_URL = f"postgresql+psycopg2://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
else:
    DATABASE_URL = "sqlite:///./tuition.db"

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:3000").split(",")
    if origin.strip()
]

# Giờ chạy tác vụ đánh dấu học phí quá hạn
OVERDUE_SWEEP_HOUR = int(os.getenv("OVERDUE_SWEEP_HOUR", "0"))
OVERDUE_SWEEP_MINUTE = int(os.getenv("OVERDUE_SWEEP_MINUTE", "0"))
