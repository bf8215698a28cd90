"""
LLM-produced structuring hints.

Asks a language model to pre-classify résumé lines. The result is only a
candidate: it still goes through validate_hint() before classification uses it.
Every failure here (missing SDK, missing key, timeout, rate limit, unparsable
reply) returns None so the heuristic classifier runs instead.
"""

import os
from typing import Any, List, Optional

from dotenv import load_dotenv

from folio.contexts.intake.line_data_structure import LineRole
from folio.contexts.intake.logger import _log_debug, _log_info, _log_warning
from folio.utils.llm import DEFAULT_TIMEOUT, get_provider, parse_json_payload

load_dotenv()

HINT_MODEL = os.getenv("HINT_MODEL")

# Résumés beyond this are truncated before prompting
MAX_PROMPT_CHARS = 12000

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are a résumé structuring assistant. You label each line of a plain-text résumé
with its layout role. You never rewrite, translate, summarise or invent text.
Return ONLY a JSON array."""

_USER_PROMPT_TEMPLATE = """\
Label every line of this résumé, in order, as a JSON array of objects:

  {{"role": <role>, "content": <line text copied verbatim>, "secondary": <optional text or null>}}

Allowed roles: {roles}

Rules:
- "name" is used at most once and only for the first line.
- "secondary" holds the company or location that belongs on the right of a job_title line.
- For bullets, drop the bullet marker from "content".
- Use "blank" with empty content for empty lines.

---
Résumé:
{content}"""


def build_hint_prompt(text: str) -> str:
    """Build the user prompt for structuring a résumé."""
    roles = ", ".join(role.value for role in LineRole)
    return _USER_PROMPT_TEMPLATE.format(roles=roles, content=text[:MAX_PROMPT_CHARS])


def request_structuring_hint(
    text: str,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[List[Any]]:
    """
    Ask an LLM for a structuring hint.

    Args:
        text: Sanitized résumé text
        provider: "openai" or "anthropic" (default: LLM_PROVIDER env var)
        model: Model name (default: HINT_MODEL env var, then provider default)
        timeout: Per-request timeout in seconds

    Returns:
        The decoded JSON array, or None on any failure
    """
    if not text.strip():
        return None

    try:
        llm = get_provider(provider_name=provider, model=model or HINT_MODEL, timeout=timeout)
        _log_info(f"Requesting structuring hint from {llm.name} (timeout {timeout:.0f}s)")
        response = llm.generate(system_prompt=_SYSTEM_PROMPT, user_prompt=build_hint_prompt(text))
    except Exception as e:
        _log_warning(f"Structuring hint unavailable: {type(e).__name__}: {e}")
        return None

    _log_debug(f"Hint response: {response.input_tokens} in / {response.output_tokens} out tokens")

    payload = parse_json_payload(response.content)
    if not isinstance(payload, list):
        _log_warning("Structuring hint response was not a JSON array")
        return None

    return payload
