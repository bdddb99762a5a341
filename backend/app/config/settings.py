# backend/app/config/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# ==================== Database ====================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./intern_eval.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
DB_INIT_ATTEMPTS = int(os.getenv("DB_INIT_ATTEMPTS", "5"))

# ==================== API ====================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "5010"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Seeded on startup when ADMIN_EMAIL is set
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")

# ==================== Scoring ====================
DEFAULT_SUB_FIELD_MAX = 5
DEFAULT_FIELD_MAX = 10
NORMALIZED_MAX = 10

# Only these metrics enter the final score; custom fields are informational
STANDARD_METRICS = (
    "Technical Competence",
    "Communication",
    "Learning & Adaptability",
    "Initiative & Ownership",
    "Professionalism",
)
