import dataclasses
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.analytics import db  # noqa: E402


class AnalyticsDbTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        enabled = dataclasses.replace(
            db.settings,
            analytics_enabled=True,
            analytics_db_path=str(Path(self.tmp.name) / "nested" / "analytics.db"),
        )
        self.patcher = patch.object(db, "settings", enabled)
        self.patcher.start()

    def tearDown(self):
        self.patcher.stop()
        self.tmp.cleanup()

    def test_logs_and_reads_runs(self):
        db.init_db()
        db.log_ai_analysis_run(
            run_id="run-1",
            model="gpt-4o-mini",
            has_job_description=True,
            schema_valid=False,
            status="error",
            error_code="llm_exception",
            latency_ms=12,
        )
        rows = db.get_latest_runs()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["status"], "error")
        self.assertEqual(rows[0]["has_job_description"], 1)
        self.assertEqual(db.purge_old_records(), {"ai_analysis_runs": 0})

    def test_run_summary_counts_by_status(self):
        db.init_db()
        for run_id, status, valid in [("a", "success", True), ("b", "success", True), ("c", "invalid_schema", False)]:
            db.log_ai_analysis_run(
                run_id=run_id,
                model="gpt-4o-mini",
                has_job_description=False,
                schema_valid=valid,
                status=status,
            )
        summary = db.get_run_summary()
        self.assertTrue(summary["enabled"])
        self.assertEqual(summary["total"], 3)
        self.assertEqual(summary["total_7d"], 3)
        self.assertEqual(summary["schema_valid"], 2)
        self.assertEqual(summary["by_status"], {"invalid_schema": 1, "success": 2})

    def test_disabled_store_is_a_no_op(self):
        disabled = dataclasses.replace(db.settings, analytics_enabled=False)
        with patch.object(db, "settings", disabled):
            db.init_db()
            db.log_ai_analysis_run(run_id="x", model="m", has_job_description=False, schema_valid=True, status="success")
            self.assertEqual(db.get_latest_runs(), [])
            self.assertEqual(db.get_run_summary(), {"enabled": False})
        self.assertFalse(Path(self.tmp.name, "nested").exists())


if __name__ == "__main__":
    unittest.main()
