import logging

from fastapi import APIRouter, Header, Request

from resume_ats.core.config import settings
from resume_ats.core.rate_limit import rate_limit
from resume_ats.core.security import check_api_key
from resume_ats.features import build_fix_plan, compatibility_band, extract_keywords, extract_technical_terms
from resume_ats.schemas.ats import (
    KeywordExtractionRequest,
    KeywordExtractionResponse,
    ScanRequest,
    ScanResponse,
    ScanResult,
)
from resume_ats.schemas.resume import ResumeRecord
from resume_ats.services.ats_llm import analyze_with_generator
from resume_ats.services.ats_service import scan
from resume_ats.services.scan_guard import ScanGuard

router = APIRouter()
logger = logging.getLogger(__name__)

scan_guard = ScanGuard(max_keys=settings.scan_guard_max_keys)


def _response(result: ScanResult, resume: ResumeRecord, cached: bool) -> ScanResponse:
    return ScanResponse(
        result=result,
        fix_plan=build_fix_plan(result, resume),
        compatibility=compatibility_band(result.overall_score),
        cached=cached,
    )


@router.post("/ats/scan", response_model=ScanResponse, response_model_by_alias=True)
@rate_limit()
async def ats_scan(
    request: Request,
    payload: ScanRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    if payload.session_id:
        result, cached = scan_guard.scan(f"scan:{payload.session_id}", payload.resume, payload.job_description)
    else:
        result, cached = scan(payload.resume, payload.job_description), False
    logger.info(
        "ats_scan overall=%s mode=%s cached=%s has_jd=%s",
        result.overall_score,
        result.analysis_mode,
        cached,
        bool(payload.job_description),
    )
    return _response(result, payload.resume, cached)


@router.post("/ats/analyze", response_model=ScanResponse, response_model_by_alias=True)
@rate_limit(settings.analyze_rate_limit)
async def ats_analyze(
    request: Request,
    payload: ScanRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    key = f"analyze:{payload.session_id}" if payload.session_id else None
    if key:
        cached_result = scan_guard.lookup(key, payload.resume, payload.job_description)
        if cached_result is not None:
            return _response(cached_result, payload.resume, True)

    result = await analyze_with_generator(payload.resume, payload.job_description)
    if key:
        scan_guard.store(key, payload.resume, payload.job_description, result)
    logger.info(
        "ats_analyze overall=%s mode=%s has_jd=%s",
        result.overall_score,
        result.analysis_mode,
        bool(payload.job_description),
    )
    return _response(result, payload.resume, False)


@router.post("/ats/keywords", response_model=KeywordExtractionResponse, response_model_by_alias=True)
@rate_limit()
async def ats_keywords(
    request: Request,
    payload: KeywordExtractionRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    keywords = extract_keywords(payload.text)
    technical_terms = extract_technical_terms(payload.text)
    return KeywordExtractionResponse(
        keywords=keywords,
        technical_terms=technical_terms,
        details={"keyword_count": len(keywords), "technical_count": len(technical_terms)},
    )
