import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")

ANALYSIS_MODEL: str = os.getenv("ANALYSIS_MODEL", "gemini-2.5-flash")
IMAGE_MODEL: str = os.getenv("IMAGE_MODEL", "gemini-2.5-flash-image")
ANALYSIS_TEMPERATURE: float = float(os.getenv("ANALYSIS_TEMPERATURE", "0.4"))

RETRY_ATTEMPTS: int = int(os.getenv("RETRY_ATTEMPTS", "3"))
RETRY_INITIAL_DELAY: float = float(os.getenv("RETRY_INITIAL_DELAY", "1.0"))

# (max_width, jpeg quality 0-1) per call site
QUALITY_CHECK_RESIZE: tuple[int, float] = (400, 0.7)
ANALYSIS_RESIZE: tuple[int, float] = (800, 0.8)
EDIT_RESIZE: tuple[int, float] = (1024, 0.85)

SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", "3600"))

PARTNER_STORE: str = "Riachuelo"
PARTNER_SEARCH_URL: str = "https://www.riachuelo.com.br/busca?q="

# Biotype/palette constraints are accepted by the edit builder but left out of
# the prompt unless this is switched on.
INTERPOLATE_EDIT_CONSTRAINTS: bool = _flag("INTERPOLATE_EDIT_CONSTRAINTS")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
