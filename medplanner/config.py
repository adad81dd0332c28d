# medplanner/config.py
import logging
import os

from dotenv import load_dotenv

# Read settings from a local .env file (if any) before falling back to the environment
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///medplanner.db")

# Default folder for exported backups when the host does not pick one
BACKUP_DIR = os.path.expanduser(os.getenv("BACKUP_DIR", "~/MedPlanner/Backups"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Minimum grade for approval (0-100 scale)
PASSING_GRADE = float(os.getenv("PASSING_GRADE", "60.0"))

# Empty string = show every semester
ACTIVE_SEMESTER_ID = os.getenv("ACTIVE_SEMESTER_ID", "")


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Called once by the host app at startup; importing medplanner never touches logging"""
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger("medplanner").setLevel(level.upper())
