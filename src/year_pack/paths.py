import os
from pathlib import Path


class Paths:
    @staticmethod
    def root() -> Path:
        """Get the project root directory.

        Can be overridden with YEAR_PACK_ROOT environment variable.
        Defaults to current working directory.
        """
        return Path(os.getenv("YEAR_PACK_ROOT", "."))

    @staticmethod
    def configs() -> Path:
        return Paths.root() / "configs"

    @staticmethod
    def reports() -> Path:
        """Get the directory generated year packs are written to.

        Can be overridden with YEAR_PACK_REPORTS_DIR environment variable.
        Defaults to 'reports' relative to project root.
        """
        reports_env = os.getenv("YEAR_PACK_REPORTS_DIR")
        if reports_env:
            return Path(reports_env)
        return Paths.root() / "reports"

    @staticmethod
    def ensure_reports() -> Path:
        p = Paths.reports()
        p.mkdir(parents=True, exist_ok=True)
        return p
