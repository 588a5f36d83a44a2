from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_SCORING_CONFIG_PATH = Path(__file__).with_name("scoring.yaml")

_REQUIRED_SECTIONS = (
    "version",
    "action_verbs",
    "general_keywords",
    "technical_patterns",
    "stop_words",
    "quantifiable_patterns",
    "messages",
)


def get_scoring_config() -> dict[str, Any]:
    """Load the scoring tables from resume_ats/core/scoring.yaml and cache them."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    if not _SCORING_CONFIG_PATH.exists():
        raise RuntimeError(
            f"Scoring config not found at '{_SCORING_CONFIG_PATH}'. "
            "Expected file: resume_ats/core/scoring.yaml"
        )

    try:
        import yaml  # type: ignore[import-not-found]
    except Exception as exc:
        raise RuntimeError(
            "Unable to parse scoring config because PyYAML is unavailable. "
            "Install dependency: PyYAML."
        ) from exc

    try:
        raw = _SCORING_CONFIG_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read scoring config '{_SCORING_CONFIG_PATH}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:  # type: ignore[attr-defined]
        raise RuntimeError(
            f"Invalid YAML in scoring config '{_SCORING_CONFIG_PATH}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid scoring config '{_SCORING_CONFIG_PATH}': expected a top-level mapping."
        )

    missing = [section for section in _REQUIRED_SECTIONS if section not in parsed]
    if missing:
        raise RuntimeError(
            f"Invalid scoring config '{_SCORING_CONFIG_PATH}': missing sections {', '.join(missing)}."
        )

    _SCORING_CONFIG_CACHE = parsed
    return _SCORING_CONFIG_CACHE


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'keyword.general.cap_rule_based'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def scoring_message(key: str, **kwargs: Any) -> str:
    messages = get_scoring_config().get("messages") or {}
    template = messages.get(key, key)
    return str(template).format(**kwargs)


@dataclass(frozen=True)
class ScoringTables:
    version: str
    action_verbs: tuple[str, ...]
    action_verb_re: re.Pattern[str]
    passive_phrases: tuple[str, ...]
    quantifiable_re: re.Pattern[str]
    general_keywords: tuple[str, ...]
    general_keyword_res: tuple[tuple[str, re.Pattern[str]], ...]
    technical_res: tuple[re.Pattern[str], ...]
    stop_words: frozenset[str]


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item).strip().lower() for item in value if str(item).strip())


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # Whole word/phrase with an optional plural "s"; inner spaces match any whitespace.
    body = r"\s+".join(re.escape(part) for part in keyword.split())
    return re.compile(rf"(?<![a-z0-9]){body}s?(?![a-z0-9])", re.IGNORECASE)


def _compile(pattern: str, source: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise RuntimeError(f"Invalid regex in scoring config {source}: '{pattern}': {exc}") from exc


@lru_cache(maxsize=1)
def get_scoring_tables() -> ScoringTables:
    config = get_scoring_config()

    action_verbs = _string_list(config.get("action_verbs"))
    quantifiable = [str(item) for item in config.get("quantifiable_patterns") or []]
    general_keywords = _string_list(config.get("general_keywords"))

    technical_raw = config.get("technical_patterns") or {}
    technical_patterns: list[str] = []
    if isinstance(technical_raw, dict):
        for group in technical_raw.values():
            technical_patterns.extend(str(item) for item in group or [])
    elif isinstance(technical_raw, list):
        technical_patterns.extend(str(item) for item in technical_raw)

    verb_alternation = "|".join(re.escape(verb) for verb in action_verbs) or r"(?!x)x"
    quant_alternation = "|".join(f"(?:{pattern})" for pattern in quantifiable) or r"(?!x)x"

    return ScoringTables(
        version=str(config.get("version")),
        action_verbs=action_verbs,
        action_verb_re=_compile(rf"\b(?:{verb_alternation})\b", "action_verbs"),
        passive_phrases=_string_list(config.get("passive_phrases")),
        quantifiable_re=_compile(quant_alternation, "quantifiable_patterns"),
        general_keywords=general_keywords,
        general_keyword_res=tuple((keyword, _keyword_pattern(keyword)) for keyword in general_keywords),
        technical_res=tuple(_compile(pattern, "technical_patterns") for pattern in technical_patterns),
        stop_words=frozenset(_string_list(config.get("stop_words"))),
    )
