"""
AI Parsing Service - job ad generation and resume extraction.

The model is asked for strict JSON, but its output is not guaranteed to be
JSON. Every response goes through parse_ai_json():

    1. direct parse of the whole text
    2. otherwise the first fenced code block (```json ... ``` or ``` ... ```)
    3. otherwise an empty dict

and every consumer then fills each field independently, whichever stage
produced the value.
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from app.services.openai_client import OpenAIClient
from app.utils.normalize import normalize_string_list

# Raw text kept from the PDF, and the part of it sent to the model
MAX_RESUME_TEXT_CHARS = 100_000
MAX_RESUME_PROMPT_CHARS = 12_000

JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
ANY_FENCE_RE = re.compile(r"```\s*([\s\S]*?)\s*```")


# ============================================================
# TWO-STAGE JSON PARSING
# ============================================================

class ParseStage(str, Enum):
    direct = "direct"
    fenced_block = "fenced_block"
    default_filled = "default_filled"


@dataclass
class ParsedPayload:
    stage: ParseStage
    value: Dict[str, Any] = field(default_factory=dict)


def _load_object(text: str):
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def parse_ai_json(content: str) -> ParsedPayload:
    """Recover a JSON object from model output, recording how it was found."""
    content = content or ""
    value = _load_object(content)
    if value is not None:
        return ParsedPayload(ParseStage.direct, value)

    match = JSON_FENCE_RE.search(content) or ANY_FENCE_RE.search(content)
    if match:
        value = _load_object(match.group(1))
        if value is not None:
            return ParsedPayload(ParseStage.fenced_block, value)

    return ParsedPayload(ParseStage.default_filled, {})


def _text_or(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


# ============================================================
# JOB AD GENERATION
# ============================================================

JOB_AD_SYSTEM_PROMPT = """You are a professional HR assistant that creates complete job postings.
Return output strictly as JSON with this shape:
{
  "title": "string",
  "company": "string",
  "department": "string",
  "location": "string",
  "job_type": "string",
  "category": "string",
  "language": "string",
  "status": "string",
  "description": "string",
  "required_skills": ["string"],
  "requirements": ["string"]
}"""

JOB_AD_DEFAULTS = {
    "title": "Generated Role",
    "company": "Your Company",
    "department": "General",
    "location": "Remote",
    "job_type": "Full-time",
    "category": "General",
    "language": "English",
    "status": "Open",
    "description": "",
}


def build_job_ad(data: Dict[str, Any]) -> dict:
    """Default-fill every job ad field; list fields accept comma strings."""
    job_ad = {key: _text_or(data.get(key), default) for key, default in JOB_AD_DEFAULTS.items()}
    job_ad["required_skills"] = normalize_string_list(data.get("required_skills"))
    job_ad["requirements"] = normalize_string_list(data.get("requirements"))
    return job_ad


def generate_job_ad(client: OpenAIClient, description: str) -> dict:
    content = client.complete(
        JOB_AD_SYSTEM_PROMPT,
        f"Generate a professional job post based on this input: {description}",
        temperature=0.7
    )
    return build_job_ad(parse_ai_json(content).value)


# ============================================================
# RESUME EXTRACTION
# ============================================================

RESUME_SYSTEM_PROMPT = "You extract structured resume data and return JSON only."

RESUME_PROMPT_TEMPLATE = """You are a resume parser. From the resume text below, extract a JSON object with this schema only:
{{
  "contact": {{ "name": "string", "email": "string", "phone": "string", "location": "string" }},
  "summary": "string",
  "skills": ["string"],
  "experience": [
    {{ "title": "string", "company": "string", "start_date": "string", "end_date": "string", "responsibilities": ["string"] }}
  ],
  "education": [
    {{ "degree": "string", "institution": "string", "year": "string" }}
  ],
  "certifications": ["string"],
  "languages": ["string"],
  "links": ["string"]
}}
Fill missing values with empty strings or empty arrays. Keep lists concise and deduplicated.
Resume text:
{resume_text}"""

CONTACT_FIELDS = ("name", "email", "phone", "location")


def validate_parsed_resume(data: Dict[str, Any]) -> dict:
    """
    Validate and sanitize parsed resume data.
    Ensures all schema fields exist with correct types; unknown keys pass through.
    """
    validated = dict(data)

    contact = data.get("contact")
    if isinstance(contact, dict):
        validated["contact"] = contact
    else:
        validated["contact"] = {key: "" for key in CONTACT_FIELDS}

    summary = data.get("summary")
    validated["summary"] = summary if isinstance(summary, str) else ""

    for key in ("skills", "certifications", "languages", "links"):
        validated[key] = normalize_string_list(data.get(key))

    for key in ("experience", "education"):
        value = data.get(key)
        validated[key] = [item for item in value if isinstance(item, dict)] if isinstance(value, list) else []

    return validated


def build_resume_prompt(resume_text: str) -> str:
    return RESUME_PROMPT_TEMPLATE.format(resume_text=resume_text[:MAX_RESUME_PROMPT_CHARS])


def extract_resume(client: OpenAIClient, resume_text: str) -> dict:
    content = client.complete(RESUME_SYSTEM_PROMPT, build_resume_prompt(resume_text), temperature=0.2)
    return validate_parsed_resume(parse_ai_json(content).value)
