import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.features.job_match import (  # noqa: E402
    build_job_match,
    experience_match,
    format_match,
    keyword_match_percent,
    skills_match,
)
from resume_ats.schemas.ats import JobKeywordMatch  # noqa: E402
from resume_ats.schemas.resume import ResumeRecord  # noqa: E402
from resume_fixtures import frontend_resume  # noqa: E402

JD = "Frontend Engineer at Fabrikam. Senior React Developer with TypeScript and GraphQL experience"


class JobMatchTests(unittest.TestCase):
    def test_experience_match(self):
        record = ResumeRecord.model_validate(frontend_resume())
        self.assertEqual(experience_match(record, JD), 65)
        self.assertEqual(experience_match(record, "Data scientist"), 50)
        self.assertEqual(experience_match(ResumeRecord(), JD), 30)

    def test_skills_match(self):
        record = ResumeRecord.model_validate(frontend_resume())
        self.assertEqual(skills_match(record, JD), 70)
        self.assertEqual(skills_match(ResumeRecord(), JD), 40)

    def test_keyword_match_percent(self):
        keywords = [
            JobKeywordMatch(keyword="react", matched=True),
            JobKeywordMatch(keyword="graphql", matched=False),
            JobKeywordMatch(keyword="typescript", matched=True),
        ]
        self.assertEqual(keyword_match_percent(keywords), 67)
        self.assertEqual(keyword_match_percent([]), 0)

    def test_recommendations(self):
        record = ResumeRecord.model_validate(frontend_resume())
        keywords = [
            JobKeywordMatch(keyword="graphql", matched=False),
            JobKeywordMatch(keyword="kafka", matched=False),
            JobKeywordMatch(keyword="react", matched=True),
        ]
        report = build_job_match(record, JD, keywords)
        self.assertEqual(report.keyword_match, 33)
        self.assertEqual(report.recommendations[0], "Add these missing keywords: graphql, kafka")
        self.assertIn("Tailor your work experience descriptions to match the job requirements", report.recommendations)
        self.assertIn("Include quantifiable achievements and metrics in your experience", report.recommendations)

    def test_format_match(self):
        record = ResumeRecord.model_validate(frontend_resume())
        self.assertEqual(format_match(record), 100)
        self.assertEqual(format_match(ResumeRecord()), 60)
        self.assertEqual(format_match(ResumeRecord.model_validate({"personalInfo": {"email": "a@b.co"}})), 70)

    def test_recommendations_use_mean_of_all_four_scores(self):
        record = ResumeRecord.model_validate(frontend_resume())
        keywords = [
            JobKeywordMatch(keyword="react", matched=True),
            JobKeywordMatch(keyword="typescript", matched=True),
            JobKeywordMatch(keyword="graphql", matched=False),
        ]
        # 67, 65, 70 and 100 average to 76: no tailoring hints, quantification still suggested
        report = build_job_match(record, JD, keywords)
        self.assertEqual(report.format_match, 100)
        self.assertEqual(
            report.recommendations,
            [
                "Include quantifiable achievements and metrics in your experience",
                "Optimize your professional summary to include key job requirements",
            ],
        )

    def test_no_job_description(self):
        self.assertIsNone(build_job_match(ResumeRecord(), None, []))
        self.assertIsNone(build_job_match(ResumeRecord(), "  ", []))


if __name__ == "__main__":
    unittest.main()
