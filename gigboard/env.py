import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the working directory if present.

    Variables already set in the environment win over the file.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass
class Settings:
    """Runtime settings, read from GIGBOARD_* environment variables."""

    db_path: Path = Path("data/gigs.db")
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    caller: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=Path(os.getenv("GIGBOARD_DB", "data/gigs.db")),
            log_level=os.getenv("GIGBOARD_LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("GIGBOARD_LOG_DIR", "logs")),
            caller=os.getenv("GIGBOARD_CALLER") or None,
        )
