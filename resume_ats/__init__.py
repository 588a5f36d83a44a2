from .schemas import ResumeRecord, ScanResult
from .services.ats_service import scan

__all__ = ["scan", "ResumeRecord", "ScanResult"]
