"""Generate tailored cover letters using OpenAI (or fallback template)."""
from __future__ import annotations

from jobhunter.config import get_env
from jobhunter.log import get_logger
from jobhunter.models import Posting

log = get_logger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


def _call_openai(api_key: str, model: str, prompt: str) -> str:
    from openai import OpenAI

    client = OpenAI(api_key=api_key)
    r = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=500,
    )
    return (r.choices[0].message.content or "").strip()


def generate_cover_letter(posting: Posting, user_profile: str = "") -> str:
    api_key = get_env("OPENAI_API_KEY")
    if not api_key:
        log.debug("No OPENAI_API_KEY, using template cover letter")
        return _fallback_letter(posting)

    model = get_env("OPENAI_MODEL", DEFAULT_MODEL)
    prompt = f"""Generate a professional cover letter for a cybersecurity position with the following details:

Job Title: {posting.title}
Company: {posting.company}
Job Description: {posting.description[:2000]}
My Profile: {user_profile}

Write a compelling, professional cover letter that highlights relevant skills and experience. Focus on the security aspects mentioned in the job description. Keep it concise (250-300 words) and tailored to the specific role."""

    try:
        letter = _call_openai(api_key, model, prompt)
    except Exception as exc:
        log.warning("Cover letter generation failed (%s), using template", exc)
        return _fallback_letter(posting)
    if not letter:
        return _fallback_letter(posting)
    log.info("Cover letter generated for %s @ %s", posting.title, posting.company)
    return letter


def _fallback_letter(posting: Posting) -> str:
    name = get_env("CANDIDATE_NAME") or "[Your Name]"
    return f"""Dear Hiring Manager,

I am writing to express my interest in the {posting.title} position at {posting.company}. With my background in cybersecurity and cloud security, I am confident in my ability to contribute to your security initiatives.

My experience covers Fortinet firewalls, AWS security services, SIEM solutions and secure cloud environments, with hands-on work in security monitoring, incident response, vulnerability management and threat intelligence.

Thank you for considering my application. I look forward to discussing how my skills can support {posting.company}'s security objectives.

Sincerely,
{name}"""
