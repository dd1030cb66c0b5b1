"""Test path resolution with environment variable overrides."""

import os
import tempfile
from pathlib import Path
from year_pack.paths import Paths


def test_default_paths():
    """Test that default paths work as expected."""
    old_root = os.environ.pop("YEAR_PACK_ROOT", None)
    old_reports = os.environ.pop("YEAR_PACK_REPORTS_DIR", None)

    try:
        assert Paths.root() == Path(".")
        assert Paths.configs() == Path("configs")
        assert Paths.reports() == Path("reports")
    finally:
        if old_root:
            os.environ["YEAR_PACK_ROOT"] = old_root
        if old_reports:
            os.environ["YEAR_PACK_REPORTS_DIR"] = old_reports


def test_environment_overrides():
    """Test that environment variables override default paths."""
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)

        old_root = os.environ.pop("YEAR_PACK_ROOT", None)
        old_reports = os.environ.pop("YEAR_PACK_REPORTS_DIR", None)

        try:
            os.environ["YEAR_PACK_ROOT"] = str(temp_path)
            assert Paths.root() == temp_path
            assert Paths.configs() == temp_path / "configs"
            assert Paths.reports() == temp_path / "reports"

            # reports override wins over the root
            reports_path = temp_path / "custom_reports"
            os.environ["YEAR_PACK_REPORTS_DIR"] = str(reports_path)
            assert Paths.reports() == reports_path
        finally:
            os.environ.pop("YEAR_PACK_ROOT", None)
            os.environ.pop("YEAR_PACK_REPORTS_DIR", None)
            if old_root:
                os.environ["YEAR_PACK_ROOT"] = old_root
            if old_reports:
                os.environ["YEAR_PACK_REPORTS_DIR"] = old_reports


def test_ensure_reports_creates_directory():
    with tempfile.TemporaryDirectory() as temp_dir:
        reports = Path(temp_dir) / "nested" / "reports"

        os.environ["YEAR_PACK_REPORTS_DIR"] = str(reports)
        try:
            created = Paths.ensure_reports()
            assert created == reports
            assert reports.is_dir()
            # second call is a no-op
            assert Paths.ensure_reports() == reports
        finally:
            os.environ.pop("YEAR_PACK_REPORTS_DIR", None)
