"""
Best-effort job field extraction from listing text.

The extractor's output is a guess: the add-job workflow shows every field
to the user for confirmation before anything is stored.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import openai

from .env import Settings, require_api_key
from .errors import ExtractionError
from .logger import StructuredLogger, get_logger
from .schema import DEFAULT_STATUS, coerce_status

PROMPT_TEMPLATE = (
    "Extract the following job information from this job listing:\n\n"
    "{text}\n\n"
    "Answer with exactly these five lines, leaving a value blank if it is unknown:\n"
    "Job Title: \nCompany: \nLocation: \nDate Posted: \nStatus: "
)

# Label on each answer line -> ExtractedFields attribute
FIELD_LABELS = {
    "job title": "job_title",
    "title": "job_title",
    "company": "company",
    "location": "location",
    "date posted": "date_posted",
    "posted": "date_posted",
    "status": "status",
}
POSITIONAL_FIELDS = ["job_title", "company", "location", "date_posted", "status"]

_LABEL_RE = re.compile(r"^\s*[-*]?\s*([A-Za-z ]+?)\s*:\s*(.*)$")


@dataclass
class ExtractedFields:
    job_title: str = ""
    company: str = ""
    location: str = ""
    date_posted: str = ""
    status: str = field(default=DEFAULT_STATUS)

    def __post_init__(self):
        self.status = coerce_status(self.status)


class FieldExtractor:
    """Interface for anything that turns listing text into ExtractedFields."""

    def extract(self, raw_text: str) -> ExtractedFields:
        raise NotImplementedError


def parse_completion(text: str) -> ExtractedFields:
    """Parse a completion into fields.

    Lines carrying a known label ("Company: Acme") are matched by label.
    If none do, the first five non-empty lines are read in prompt order.
    """
    lines: List[str] = [ln.strip() for ln in (text or "").splitlines() if ln.strip()]
    values: Dict[str, str] = {}

    for line in lines:
        m = _LABEL_RE.match(line)
        if not m:
            continue
        attr = FIELD_LABELS.get(m.group(1).strip().lower())
        if attr and attr not in values:
            values[attr] = m.group(2).strip()

    if not values:
        for attr, line in zip(POSITIONAL_FIELDS, lines):
            values[attr] = line

    return ExtractedFields(**values)


class OpenAIExtractor(FieldExtractor):
    """Extract fields with a single OpenAI chat completion.

    The client is built on first use so a missing OPENAI_API_KEY is
    reported when extraction is attempted, not at import time.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[openai.OpenAI] = None,
        max_tokens: int = 100,
        logger: Optional[StructuredLogger] = None,
    ):
        self.settings = settings
        self.max_tokens = max_tokens
        self.logger = logger or get_logger()
        self._client = client

    @property
    def client(self) -> openai.OpenAI:
        if self._client is None:
            api_key = require_api_key(self.settings)
            self._client = openai.OpenAI(
                api_key=api_key,
                timeout=self.settings.http_timeout * 4,
                max_retries=0,
            )
        return self._client

    def extract(self, raw_text: str) -> ExtractedFields:
        text = (raw_text or "")[: self.settings.max_prompt_chars]
        prompt = PROMPT_TEMPLATE.format(text=text)
        client = self.client

        try:
            response = client.chat.completions.create(
                model=self.settings.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=0,
            )
        except openai.OpenAIError as e:
            raise ExtractionError(f"Extraction request failed: {e}") from e

        if not response.choices:
            raise ExtractionError("Extraction service returned no choices")
        content = response.choices[0].message.content or ""
        self.logger.debug("Extraction response", chars=len(content))
        return parse_completion(content)
