import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_ats.features.fix_plan import build_fix_plan, compatibility_band  # noqa: E402
from resume_ats.schemas.ats import ScanResult  # noqa: E402
from resume_ats.schemas.resume import ResumeRecord  # noqa: E402


def _result(keyword, structure, content):
    overall = int((100 + keyword + structure + content) / 4 + 0.5)
    return ScanResult(
        overall_score=overall,
        format_score=100,
        keyword_score=keyword,
        structure_score=structure,
        content_score=content,
    )


class FixPlanTests(unittest.TestCase):
    def test_all_items_sorted_by_priority_then_impact(self):
        plan = build_fix_plan(_result(40, 50, 30), ResumeRecord())
        self.assertEqual(
            [item.id for item in plan],
            ["keywords-critical", "content-critical", "summary-important", "structure-important", "format-minor"],
        )
        self.assertEqual([item.impact for item in plan], [25, 20, 18, 15, 10])
        self.assertEqual(plan[0].title, "Add Industry Keywords")

    def test_good_resume_only_gets_formatting_item(self):
        resume = ResumeRecord(summary="x" * 120)
        plan = build_fix_plan(_result(90, 100, 90), resume)
        self.assertEqual([item.id for item in plan], ["format-minor"])
        self.assertEqual(plan[0].priority, "minor")

    def test_threshold_edges(self):
        resume = ResumeRecord(summary="x" * 100)
        plan = build_fix_plan(_result(60, 80, 60), resume)
        self.assertEqual([item.id for item in plan], ["format-minor"])
        plan = build_fix_plan(_result(59, 79, 59), resume)
        self.assertEqual(
            [item.id for item in plan],
            ["keywords-critical", "content-critical", "structure-important", "format-minor"],
        )

    def test_compatibility_band(self):
        self.assertEqual(compatibility_band(85), "excellent")
        self.assertEqual(compatibility_band(84), "good")
        self.assertEqual(compatibility_band(70), "good")
        self.assertEqual(compatibility_band(55), "fair")
        self.assertEqual(compatibility_band(54), "poor")
        self.assertEqual(compatibility_band(0), "poor")


if __name__ == "__main__":
    unittest.main()
