import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.schemas.resume import ResumeRecord  # noqa: E402
from resume_ats.services.ats_service import scan  # noqa: E402
from resume_ats.services.scan_guard import ScanGuard, content_hash  # noqa: E402
from resume_fixtures import frontend_resume, strong_resume  # noqa: E402


class ScanGuardTests(unittest.TestCase):
    def setUp(self):
        self.scanner = MagicMock(side_effect=scan)
        self.guard = ScanGuard(max_keys=2, scanner=self.scanner)
        self.resume = ResumeRecord.model_validate(strong_resume())

    def test_unchanged_input_is_served_from_cache(self):
        first, cached_first = self.guard.scan("session-1", self.resume)
        second, cached_second = self.guard.scan("session-1", self.resume)
        self.assertFalse(cached_first)
        self.assertTrue(cached_second)
        self.assertIs(first, second)
        self.assertEqual(self.scanner.call_count, 1)

    def test_changed_input_is_rescanned(self):
        self.guard.scan("session-1", self.resume)
        edited = self.resume.model_copy(update={"summary": self.resume.summary + " Certified scrum master."})
        _, cached = self.guard.scan("session-1", edited)
        self.assertFalse(cached)
        _, cached = self.guard.scan("session-1", edited, "Agile delivery lead")
        self.assertFalse(cached)
        self.assertEqual(self.scanner.call_count, 3)

    def test_oldest_key_is_evicted(self):
        other = ResumeRecord.model_validate(frontend_resume())
        self.guard.scan("a", self.resume)
        self.guard.scan("b", other)
        self.guard.scan("c", other)
        self.assertEqual(len(self.guard), 2)
        self.assertIsNone(self.guard.lookup("a", self.resume))
        self.assertIsNotNone(self.guard.lookup("c", other))

    def test_content_hash_is_stable(self):
        copy = ResumeRecord.model_validate(strong_resume())
        self.assertEqual(content_hash(self.resume, None), content_hash(copy, ""))
        self.assertNotEqual(content_hash(self.resume, None), content_hash(self.resume, "jd"))

    def test_invalid_max_keys(self):
        with self.assertRaises(ValueError):
            ScanGuard(max_keys=0)


if __name__ == "__main__":
    unittest.main()
