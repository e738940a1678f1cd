"""
AI summary of a patient's record history.

The history is rendered as plain text blocks, newest encounter first,
and sent to the OpenAI chat completions API.  There is no retry: any
failure from the SDK surfaces as :class:`SummaryGenerationError`.
"""
import logging
from typing import Iterable

from django.conf import settings
from django.utils import timezone
from openai import OpenAI

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a medical AI assistant. Summarize patient medical histories concisely, "
    "highlighting key diagnoses, treatments, risk factors, and recommendations. "
    "Format your response with clear sections: Chief Complaints, Diagnoses, "
    "Treatments, and Recommendations."
)
FALLBACK_SUMMARY = 'Unable to generate summary'
MAX_COMPLETION_TOKENS = 2048


class SummaryGenerationError(Exception):
    pass


def _name(related) -> str:
    return (related or {}).get('name') or 'Unknown'


def format_record_block(record: dict) -> str:
    when = record['dateTime']
    if timezone.is_aware(when):
        when = timezone.localtime(when)
    lines = [
        f"Date: {when:%Y-%m-%d}",
        f"Hospital: {_name(record.get('hospital'))}",
        f"Doctor: {_name(record.get('doctor'))}",
        f"Disease: {record['diseaseName']}",
        f"Description: {record['diseaseDescription']}",
        f"Treatment: {record.get('treatment') or 'N/A'}",
        f"Risk Level: {record['riskLevel']}",
    ]
    if record.get('emergencyWarnings'):
        lines.append(f"Warnings: {record['emergencyWarnings']}")
    lines.append('---')
    return '\n'.join(lines)


def format_patient_history(records: Iterable[dict]) -> str:
    """Render records in the order given; callers pass them newest first."""
    return '\n\n'.join(format_record_block(r) for r in records)


def get_client() -> OpenAI:
    return OpenAI(api_key=settings.OPENAI_API_KEY or None, timeout=settings.OPENAI_TIMEOUT)


def generate_patient_summary(patient_history: str) -> str:
    try:
        response = get_client().chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Summarize this patient's medical history:\n\n{patient_history}"},
            ],
            max_completion_tokens=MAX_COMPLETION_TOKENS,
        )
        content = response.choices[0].message.content if response.choices else None
    except Exception as exc:
        logger.error("OpenAI API error: %s", exc)
        raise SummaryGenerationError('Failed to generate AI summary') from exc
    return content or FALLBACK_SUMMARY
