import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.features.keyword_match import (  # noqa: E402
    keyword_in_text,
    match_general_keywords,
    match_job_keywords,
    merge_keyword_lists,
)
from resume_ats.normalize.resume_text import matching_corpus  # noqa: E402
from resume_ats.schemas.resume import ResumeRecord  # noqa: E402
from resume_fixtures import frontend_resume, keyword_summary_resume, passive_resume  # noqa: E402

JD = "Senior React Developer with TypeScript and GraphQL experience"


class GeneralKeywordTests(unittest.TestCase):
    def test_summary_scenario_matches_expected_keywords(self):
        corpus = matching_corpus(ResumeRecord.model_validate(keyword_summary_resume()))
        coverage = match_general_keywords(corpus)
        expected = {"stakeholder", "roadmap", "budget", "risk", "agile", "sql", "reporting"}
        self.assertTrue(expected.issubset(set(coverage.matched)))
        self.assertLessEqual(len(coverage.matched), 20)
        self.assertLessEqual(len(coverage.missing), 10)
        self.assertFalse(set(coverage.matched) & set(coverage.missing))

    def test_points_are_capped_per_path(self):
        corpus = matching_corpus(ResumeRecord.model_validate(keyword_summary_resume()))
        matched = len(match_general_keywords(corpus).matched)
        self.assertGreaterEqual(matched, 8)
        self.assertEqual(match_general_keywords(corpus, cap=25).outcome.keyword_points, min(25, matched * 3))
        self.assertEqual(match_general_keywords(corpus, cap=5).outcome.keyword_points, 5)
        self.assertEqual(match_general_keywords(corpus, cap=30).outcome.keyword_points, min(30, matched * 3))

    def test_general_keywords_increment_keyword_points(self):
        corpus = matching_corpus(ResumeRecord.model_validate(passive_resume()))
        coverage = match_general_keywords(corpus)
        self.assertEqual(set(coverage.matched), {"customer", "compliance", "reporting"})
        self.assertEqual(coverage.outcome.keyword_points, 9)
        self.assertTrue(coverage.outcome.suggestions[0].startswith("Include more industry keywords such as:"))

    def test_empty_corpus(self):
        coverage = match_general_keywords("")
        self.assertEqual(coverage.matched, [])
        self.assertEqual(len(coverage.missing), 10)
        self.assertEqual(coverage.outcome.keyword_points, 0)


class JobKeywordTests(unittest.TestCase):
    def test_job_description_scenario(self):
        corpus = matching_corpus(ResumeRecord.model_validate(frontend_resume()))
        results = {item.keyword: item for item in match_job_keywords(JD, corpus)}
        self.assertTrue(results["react"].matched)
        self.assertTrue(results["typescript"].matched)
        self.assertFalse(results["graphql"].matched)
        self.assertEqual(results["graphql"].importance, "high")
        self.assertEqual(results["senior"].importance, "low")

    def test_multi_word_keyword_matches_on_any_word(self):
        self.assertTrue(keyword_in_text("machine learning", "deep learning pipelines"))
        self.assertFalse(keyword_in_text("graphql", "rest apis"))
        self.assertFalse(keyword_in_text("", "anything"))

    def test_no_job_description(self):
        self.assertEqual(match_job_keywords(None, "text"), [])
        self.assertEqual(match_job_keywords("   ", "text"), [])

    def test_merge_puts_job_results_first_without_overlap(self):
        corpus = matching_corpus(ResumeRecord.model_validate(frontend_resume()))
        job_keywords = match_job_keywords(JD, corpus)
        coverage = match_general_keywords(corpus)
        matched, missing = merge_keyword_lists(coverage, job_keywords)
        self.assertEqual(matched[:2], ["react", "typescript"])
        self.assertEqual(missing[0], "graphql")
        self.assertFalse(set(matched) & set(missing))
        self.assertLessEqual(len(matched), 20)
        self.assertLessEqual(len(missing), 10)


if __name__ == "__main__":
    unittest.main()
