import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Try to load .env from the package directory first, then fallback to project root
package_env = Path(__file__).parent / ".env"
project_root_env = Path(__file__).parent.parent / ".env"

# Load from edulms/.env if it exists, otherwise try project root
if package_env.exists():
    load_dotenv(dotenv_path=package_env)
elif project_root_env.exists():
    load_dotenv(dotenv_path=project_root_env)
else:
    # Fallback to default behavior
    load_dotenv()

# ============================================
# SUPABASE CONFIGURATION
# ============================================
# SUPABASE_URL and SUPABASE_ANON_KEY are required.
# SUPABASE_REDIRECT_URL is where confirmation emails send users back to.
# ============================================
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_REDIRECT_URL = os.getenv("SUPABASE_REDIRECT_URL", "http://localhost:8501")

APP_TITLE = os.getenv("APP_TITLE", "EduLMS")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ENV_FILES = (package_env, project_root_env)

_logging_configured = False


def configure_logging() -> None:
    """
    Install the root logging configuration once per process.
    Streamlit re-executes the entry script on every interaction, so this must be idempotent.
    """
    global _logging_configured
    if _logging_configured:
        return

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logging_configured = True
