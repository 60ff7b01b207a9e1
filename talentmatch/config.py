import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths (local development only)
DATA_DIR = Path(os.getenv("TALENTMATCH_DATA_DIR", "data"))
DB_PATH = DATA_DIR / "talentmatch.db"

# Database (PostgreSQL when set, SQLite otherwise)
DATABASE_URL = os.getenv("DATABASE_URL")

# Scoring weights (must sum to 1)
SKILLS_WEIGHT = 0.4
TEXT_WEIGHT = 0.3
EXPERIENCE_WEIGHT = 0.2
LOCATION_WEIGHT = 0.1

# Text similarity
TEXT_SCORE_SCALE = 10

# Experience proxy: years credited per experience entry
YEARS_PER_EXPERIENCE_ENTRY = 2

# Recommendation settings
RECOMMENDATION_THRESHOLD = 50
RECOMMENDATION_TTL_DAYS = 30
DEFAULT_LIST_MIN_SCORE = 50
DEFAULT_LIST_LIMIT = 20
HIGH_MATCH_SCORE = 80
JOB_CANDIDATES_MIN_SCORE = 60
JOB_CANDIDATES_LIMIT = 50

# Skill matching
SKILL_SYNONYM_EXPANSION = os.getenv("SKILL_SYNONYM_EXPANSION", "false").lower() == "true"
