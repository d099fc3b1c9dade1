"""
Document Service - anonymized candidate PDFs and job XML feeds.

The PDF never carries the candidate's name or email: only an opaque
CND-### code plus data from their latest application.
XML feeds use a fixed template per portal; text values are CDATA-wrapped.
"""

import html
import io
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

MAX_EXPERIENCE_ENTRIES = 3
MAX_RESPONSIBILITIES = 3
REDACTED = "[redacted]"


# ============================================================
# ANONYMIZED PDF
# ============================================================

def candidate_code(user_id: int) -> str:
    """Opaque identifier: CND- plus the id zero-padded to at least 3 digits."""
    return f"CND-{user_id:03d}"


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ProfileTitle", parent=base["Title"], fontSize=20, leading=24, alignment=TA_CENTER),
        "heading": ParagraphStyle("ProfileHeading", parent=base["Normal"], fontSize=14, leading=18, spaceBefore=6),
        "body": ParagraphStyle("ProfileBody", parent=base["Normal"], fontSize=12, leading=15),
        "justified": ParagraphStyle("ProfileJustified", parent=base["Normal"], fontSize=12, leading=15, alignment=TA_JUSTIFY),
        "small": ParagraphStyle("ProfileSmall", parent=base["Normal"], fontSize=10, leading=13),
        "bullet": ParagraphStyle("ProfileBullet", parent=base["Normal"], fontSize=10, leading=13, leftIndent=18, bulletIndent=6),
    }


def _p(value: Any, style: ParagraphStyle, **kwargs) -> Paragraph:
    return Paragraph(html.escape(str(value)), style, **kwargs)


def identity_scrubber(identity: Iterable[Optional[str]]) -> Callable[[Any], str]:
    """
    Build a function that blanks out identifying strings in free text.

    Each identity value (full name, email) is matched whole and, for names,
    word by word, case-insensitively.
    """
    terms = set()
    for value in identity:
        if not value or not str(value).strip():
            continue
        value = str(value).strip()
        terms.add(value)
        if "@" not in value:
            terms.update(part for part in value.split() if len(part) > 1)
    if not terms:
        return lambda text: str(text)

    # longest first so a full name wins over its parts
    alternatives = "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))
    pattern = re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)
    return lambda text: pattern.sub(REDACTED, str(text))


def render_anonymized_profile(
    user_id: int,
    application: Optional[dict],
    identity: Iterable[Optional[str]] = ()
) -> bytes:
    """
    Render the anonymized profile for a candidate.

    application is the latest application row (status, job_title,
    ai_parsed_data) or None when the candidate never applied.
    identity holds the candidate's name and email; any occurrence in the
    AI-extracted text is replaced before rendering.
    """
    application = application or {}
    parsed = application.get("ai_parsed_data")
    if not isinstance(parsed, dict):
        parsed = {}
    scrub = identity_scrubber(identity)
    styles = _styles()

    story: List[Any] = [
        _p("Anonymized Candidate Profile", styles["title"]),
        Spacer(1, 12),
        _p(f"Candidate ID: #{candidate_code(user_id)}", styles["heading"]),
        Spacer(1, 12),
        _p(f"Latest Application Status: {application.get('status') or 'N/A'}", styles["body"]),
    ]
    if application.get("job_title"):
        story.append(_p(f"Recent Role Applied: {application['job_title']}", styles["body"]))
    story.append(Spacer(1, 12))

    summary = parsed.get("summary")
    if isinstance(summary, str) and summary.strip():
        story.append(_p("Summary:", styles["heading"]))
        story.append(_p(scrub(summary), styles["justified"]))
        story.append(Spacer(1, 12))

    skills = parsed.get("skills")
    if isinstance(skills, list) and skills:
        story.append(_p("Skills:", styles["heading"]))
        story.append(_p(scrub(", ".join(str(skill) for skill in skills)), styles["body"]))
        story.append(Spacer(1, 12))

    experience = parsed.get("experience")
    if isinstance(experience, list) and experience:
        story.append(_p("Experience:", styles["heading"]))
        for exp in experience[:MAX_EXPERIENCE_ENTRIES]:
            if not isinstance(exp, dict):
                continue
            role = f"{exp.get('title') or 'Role'} at {exp.get('company') or 'Company'}"
            story.append(_p(scrub(role), styles["body"]))
            story.append(_p(f"{exp.get('start_date') or 'N/A'} - {exp.get('end_date') or 'Present'}", styles["small"]))
            responsibilities = exp.get("responsibilities")
            if isinstance(responsibilities, list):
                for item in responsibilities[:MAX_RESPONSIBILITIES]:
                    story.append(_p(scrub(item), styles["bullet"], bulletText="•"))
            story.append(Spacer(1, 12))

    story.append(_p("Generated At:", styles["heading"]))
    story.append(_p(datetime.now().strftime("%Y-%m-%d %H:%M:%S"), styles["body"]))

    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=LETTER,
        leftMargin=50,
        rightMargin=50,
        topMargin=50,
        bottomMargin=50,
        title="Anonymized Candidate Profile",
        author="",
    )
    doc.build(story)
    return output.getvalue()


# ============================================================
# XML JOB FEEDS
# ============================================================

INDEED_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<jobs>
  <job>
    <title>{title}</title>
    <company>{company}</company>
    <location>{location}</location>
    <jobtype>{job_type}</jobtype>
    <category>{category}</category>
    <description>{description}</description>
    <required_skills>{skills}</required_skills>
    <url>{url_cdata}</url>
    <date>{created_at_cdata}</date>
  </job>
</jobs>"""

GLASSDOOR_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<source>
  <publisher>{publisher}</publisher>
  <publisherurl>{site_url}</publisherurl>
  <lastBuildDate>{build_date}</lastBuildDate>
  <job>
    <title>{title}</title>
    <employer>{company}</employer>
    <location>{location}</location>
    <jobtype>{job_type}</jobtype>
    <description>{description}</description>
    <skills>{skills}</skills>
    <url>{url_cdata}</url>
    <date>{created_at_cdata}</date>
  </job>
</source>"""

LINKEDIN_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<source>
  <publisherName>{publisher}</publisherName>
  <publisherUrl>{site_url}</publisherUrl>
  <lastBuildDate>{build_date}</lastBuildDate>
  <job>
    <jobId>{job_id}</jobId>
    <title>{title}</title>
    <companyName>{company}</companyName>
    <location>{location}</location>
    <jobType>{linkedin_job_type}</jobType>
    <description>{description}</description>
    <skills>{skills}</skills>
    <url>{url_cdata}</url>
    <postedDate>{created_at}</postedDate>
  </job>
</source>"""

GENERIC_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<jobfeed>
  <job>
    <id>{job_id}</id>
    <title>{title}</title>
    <company>{company}</company>
    <location>{location}</location>
    <job_type>{job_type}</job_type>
    <category>{category}</category>
    <description>{description}</description>
    <required_skills>{skills}</required_skills>
    <url>{url}</url>
    <created_at>{created_at}</created_at>
  </job>
</jobfeed>"""

FEED_TEMPLATES = {
    "indeed": INDEED_TEMPLATE,
    "glassdoor": GLASSDOOR_TEMPLATE,
    "linkedin": LINKEDIN_TEMPLATE,
    "generic": GENERIC_TEMPLATE,
}


def normalize_portal(portal: Optional[str]) -> str:
    return (portal or "generic").strip().lower()


def is_supported_portal(portal: str) -> bool:
    return portal in FEED_TEMPLATES


def cdata(value: Any) -> str:
    """Wrap text in CDATA; an embedded ']]>' is split across two sections."""
    text = "" if value is None else str(value)
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _iso(value: Any) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    return "" if value is None else str(value)


def _skills_text(job: dict) -> str:
    skills = job.get("requirements") or job.get("required_skills")
    if isinstance(skills, (list, tuple)):
        return ", ".join(str(skill) for skill in skills)
    return str(skills or "")


def render_job_feed(job: dict, portal: str, site_url: str, publisher: str) -> str:
    """Fill the portal's template from a job row. portal must be supported."""
    template = FEED_TEMPLATES[portal]
    company = job.get("department") or job.get("company") or ""
    job_type = job.get("job_type") or job.get("status")
    url = f"{site_url}/jobs/{job.get('id')}"
    created_at = _iso(job.get("created_at"))
    return template.format(
        job_id=job.get("id"),
        title=cdata(job.get("title") or ""),
        company=cdata(company),
        location=cdata(job.get("location") or ""),
        job_type=cdata(job_type or "Full-time"),
        linkedin_job_type=cdata(job_type or "FULL_TIME"),
        category=cdata(job.get("category") or "General"),
        description=cdata(job.get("description") or ""),
        skills=cdata(_skills_text(job)),
        url=html.escape(url),
        url_cdata=cdata(url),
        created_at=created_at,
        created_at_cdata=cdata(created_at),
        publisher=html.escape(publisher),
        site_url=html.escape(site_url),
        build_date=_iso(datetime.now(timezone.utc)),
    )
