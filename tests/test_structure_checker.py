import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.features.structure import check_structure  # noqa: E402
from resume_ats.schemas.resume import ResumeRecord  # noqa: E402
from resume_fixtures import strong_resume  # noqa: E402


class StructureCheckerTests(unittest.TestCase):
    def test_complete_resume_gets_all_buckets(self):
        outcome = check_structure(ResumeRecord.model_validate(strong_resume()))
        self.assertEqual(outcome.structure_points, 100)
        self.assertEqual(outcome.suggestions, [])
        self.assertEqual(
            outcome.strengths,
            [
                "Complete contact information",
                "Professional summary included",
                "Work experience section present",
                "Education information included",
            ],
        )

    def test_empty_resume_gets_only_suggestions(self):
        outcome = check_structure(ResumeRecord())
        self.assertEqual(outcome.structure_points, 0)
        self.assertEqual(outcome.strengths, [])
        self.assertEqual(len(outcome.suggestions), 4)
        self.assertIn("Add a professional summary (150-300 words recommended)", outcome.suggestions)

    def test_contact_needs_name_email_and_phone(self):
        data = strong_resume()
        data["personalInfo"]["phone"] = ""
        outcome = check_structure(ResumeRecord.model_validate(data))
        self.assertFalse(outcome.passed("contact"))
        self.assertEqual(outcome.structure_points, 75)
        self.assertIn("Add complete contact information", outcome.suggestions)

    def test_summary_must_exceed_fifty_characters(self):
        data = strong_resume()
        data["summary"] = "x" * 50
        self.assertFalse(check_structure(ResumeRecord.model_validate(data)).passed("summary"))
        data["summary"] = "x" * 51
        self.assertTrue(check_structure(ResumeRecord.model_validate(data)).passed("summary"))

    def test_adding_education_never_lowers_score(self):
        data = strong_resume()
        data["education"] = []
        before = check_structure(ResumeRecord.model_validate(data)).structure_points
        data["education"] = [{"degree": "MBA", "institution": "State University"}]
        after = check_structure(ResumeRecord.model_validate(data)).structure_points
        self.assertGreaterEqual(after, before)
        self.assertEqual(after - before, 25)


if __name__ == "__main__":
    unittest.main()
