"""
Course Record Normalizer.

This module cleans raw third-party catalog entries into CanonicalCourse
records. It runs offline as a batch job over a catalog file, never per
request.
"""

import json
import logging
import re
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from ..config import (
    SUBJECT_MAP,
    DEFAULT_PROVIDER,
    DEFAULT_CREDIT_VALUE,
    DEFAULT_CREDIT_TYPE,
)
from ..errors import ValidationError
from ..models import CanonicalCourse, CourseLevel, extract_course_number

logger = logging.getLogger(__name__)

# First 3-digit number in the title head, e.g. "Math 301" in "Math 301: Linear Algebra"
TITLE_NUMBER_RE = re.compile(r"\b[1-9]\d\d\b")

# Lab courses carry an L suffix on the number, e.g. "Biology 111L"
LAB_SUFFIX_RE = re.compile(r"\b[1-9]\d{2}L\b", re.IGNORECASE)


class CourseNormalizer:
    """
    Normalizes provider catalog records.

    WHY NORMALIZATION IS NEEDED:
    ---------------------------
    Provider catalogs are inconsistent. A page at
    ".../linear-algebra-201.html" may be titled "Math 301: Linear Algebra".
    The URL slug is the reliable source for the course number, and the
    number decides whether the course counts toward the upper-level credit
    floor. So the URL wins and the title is rewritten to match.

    STEPS PER RECORD:
    ----------------
    1. Map the subject through SUBJECT_MAP (unmapped subjects pass through)
    2. Strip the query string from the URL
    3. Infer the course number and level from the last URL path segment
    4. Rewrite the number in the title head to match the URL
    5. Keep an explicit lab flag, else infer it from a "111L"-style title
    6. Default credit value (3) and credit type ("ACE")

    After that, records are folded by URL keeping the first occurrence.

    Usage:
        normalizer = CourseNormalizer()
        canonical = normalizer.normalize(raw_records)
    """

    def __init__(self, subject_map: dict = None, default_provider: str = DEFAULT_PROVIDER):
        self.subject_map = SUBJECT_MAP if subject_map is None else subject_map
        self.default_provider = default_provider

    def normalize(self, raw_records) -> list:
        """
        Normalize and de-duplicate a batch of raw catalog records.

        Pure and deterministic: the same input always yields the same output
        in the same order.
        """
        cleaned = []
        seen_urls = set()

        for raw in raw_records:
            course = self.normalize_record(raw)

            # Records without a URL cannot be identified, so they are never folded
            if course.url:
                if course.url in seen_urls:
                    continue
                seen_urls.add(course.url)

            cleaned.append(course)

        return cleaned

    def normalize_record(self, raw: dict) -> CanonicalCourse:
        if not isinstance(raw, dict):
            raise ValidationError(f"Catalog record must be an object (got {raw!r})")

        raw_title = raw.get("title") or ""
        url = strip_query(raw.get("url") or "")

        number, level = infer_level_from_url(url)
        if level == CourseLevel.UNKNOWN:
            # Prefer the URL; fall back to whatever level the record carried
            level = _parse_level(raw.get("level"))

        subject = raw.get("subject")
        if subject:
            subject = self.subject_map.get(subject, subject)
        else:
            subject = None

        credit_value = raw.get("credit_value")
        credit_type = raw.get("credit_type")

        return CanonicalCourse(
            provider=raw.get("provider") or self.default_provider,
            subject=subject,
            title=fix_title_number(raw_title, number),
            url=url,
            level=level,
            course_number=number,
            credit_value=DEFAULT_CREDIT_VALUE if credit_value is None else credit_value,
            credit_type=DEFAULT_CREDIT_TYPE if credit_type is None else credit_type,
            has_lab=raw.get("has_lab") is True or has_lab_suffix(raw_title),
            description=raw.get("description"),
        )

    def normalize_file(self, input_path, output_path) -> list:
        """
        Batch helper: read a raw catalog JSON list and write the canonical list.

        Returns the canonical records that were written.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        with open(input_path, "r", encoding="utf-8") as f:
            rows = json.load(f)

        cleaned = self.normalize(rows)
        logger.info("Catalog normalized: input=%d output=%d", len(rows), len(cleaned))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([c.to_dict() for c in cleaned], f, indent=2)

        logger.info("Wrote %s", output_path)
        return cleaned


def strip_query(url: str) -> str:
    """Drop the query string and fragment, e.g. "...-201.html?ref=x" -> "...-201.html"."""
    if not url:
        return ""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def infer_level_from_url(url: str) -> tuple:
    """
    Infer (course_number, CourseLevel) from the last path segment of a URL.

    ".../economics-202-macro.html" -> (202, LOWER)
    ".../biology-111l.html"        -> (111, LOWER)
    ".../intro-to-economics.html"  -> (None, UNKNOWN)
    """
    path = urlsplit(url).path.rstrip("/")
    if not path:
        return None, CourseLevel.UNKNOWN

    slug = path.rsplit("/", 1)[-1]
    if slug.lower().endswith(".html"):
        slug = slug[:-5]

    number = extract_course_number(slug)
    return number, CourseLevel.from_number(number)


def fix_title_number(title: str, number) -> str:
    """
    Replace the first 3-digit number before the first colon with `number`.

    "Math 301: Linear Algebra", 201 -> "Math 201: Linear Algebra"
    Titles with no number in the head are left unchanged.
    """
    if number is None:
        return title

    head, sep, rest = title.partition(":")
    if not TITLE_NUMBER_RE.search(head):
        return title
    return TITLE_NUMBER_RE.sub(str(number), head, count=1) + sep + rest


def has_lab_suffix(title: str) -> bool:
    return bool(LAB_SUFFIX_RE.search(title or ""))


def _parse_level(value) -> CourseLevel:
    try:
        return CourseLevel(value)
    except ValueError:
        return CourseLevel.UNKNOWN
