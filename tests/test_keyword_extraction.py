import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.features.keywords import (  # noqa: E402
    extract_keywords,
    extract_technical_terms,
    keyword_importance,
    top_words,
    word_frequencies,
)

JD = "Senior React Developer with TypeScript and GraphQL experience"


class KeywordExtractionTests(unittest.TestCase):
    def test_technical_terms_in_order_of_appearance(self):
        self.assertEqual(extract_technical_terms(JD), ["react", "typescript", "graphql"])

    def test_multi_word_and_hyphenated_terms(self):
        text = "Machine learning on AWS with CI/CD, full-stack Node.js and Project Management"
        terms = extract_technical_terms(text)
        for term in ["machine learning", "aws", "ci/cd", "full-stack", "node.js", "project management"]:
            self.assertIn(term, terms)

    def test_extract_keywords_puts_technical_terms_first(self):
        self.assertEqual(
            extract_keywords(JD),
            ["react", "typescript", "graphql", "senior", "developer"],
        )

    def test_stop_words_and_numbers_are_dropped(self):
        words = top_words("We require 5 years of experience and strong skills with the payments platform")
        self.assertNotIn("experience", words)
        self.assertNotIn("years", words)
        self.assertNotIn("5", words)
        self.assertNotIn("the", words)
        self.assertIn("payments", words)
        self.assertIn("platform", words)

    def test_short_words_need_repetition(self):
        words = top_words("api api design for the ops team ops")
        self.assertIn("api", words)
        self.assertIn("ops", words)
        self.assertNotIn("for", words)
        self.assertEqual(words[0], "api")

    def test_keyword_count_is_capped(self):
        text = " ".join(f"keyword{index:02d}alpha" for index in range(40))
        self.assertEqual(len(extract_keywords(text)), 15)

    def test_empty_text(self):
        self.assertEqual(extract_keywords(""), [])
        self.assertEqual(extract_keywords(None), [])
        self.assertEqual(extract_technical_terms(None), [])

    def test_keyword_importance(self):
        technical = extract_technical_terms("Python engineer, python services, billing billing")
        frequencies = word_frequencies("Python engineer, python services, billing billing")
        self.assertEqual(keyword_importance("python", technical, frequencies), "high")
        self.assertEqual(keyword_importance("billing", technical, frequencies), "medium")
        self.assertEqual(keyword_importance("services", technical, frequencies), "low")


if __name__ == "__main__":
    unittest.main()
