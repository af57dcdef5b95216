"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, List, Optional, Sequence

from jobtracker.logger import get_logger, reset_logger
from jobtracker.store import JobStore


class ScriptedPrompter:
    """Stands in for Prompter, answering from a queue of canned replies.

    A reply of None accepts the default offered by the caller.
    Every question is recorded as (kind, label, default, choices).
    """

    def __init__(self, answers: Sequence[Optional[str]] = ()):
        self.answers: List[Optional[str]] = list(answers)
        self.asked: List[tuple] = []

    def text(self, label: str, default: str = "") -> str:
        self.asked.append(("text", label, default, None))
        answer = self._next()
        return default if answer is None else answer

    def select(self, label: str, choices: Sequence[str], default: Optional[str] = None) -> str:
        self.asked.append(("select", label, default, list(choices)))
        answer = self._next()
        if answer is None:
            answer = default if default is not None else choices[0]
        if answer not in choices:
            raise AssertionError(f"{answer!r} is not one of {list(choices)}")
        return answer

    def _next(self) -> Optional[str]:
        if not self.answers:
            raise AssertionError("Prompter ran out of scripted answers")
        return self.answers.pop(0)


@pytest.fixture(autouse=True)
def quiet_logger():
    """Global logger without console or file output."""
    reset_logger()
    logger = get_logger(enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture
def store(tmp_path, quiet_logger):
    """Initialized store on a temporary database."""
    s = JobStore(tmp_path / "jobs.db", logger=quiet_logger)
    s.initialize()
    yield s
    if not s.closed:
        s.close()


@pytest.fixture
def job_fields() -> Dict[str, str]:
    """Fields for one job, as the add-job flow passes them to the store."""
    return {
        "title": "Engineer",
        "company": "Acme",
        "location": "Remote",
        "url": "http://x",
        "date_posted": "2024-01-01",
        "status": "Applied",
    }


@pytest.fixture
def sample_listing_html() -> str:
    """Sample job listing page."""
    return """
    <html>
    <head>
        <title>Software Engineer at Acme Corp</title>
        <script>var tracking = "should not reach the prompt";</script>
        <style>.x { color: red; }</style>
    </head>
    <body>
        <h1>Software Engineer</h1>
        <div class="company">Acme Corp</div>
        <div class="location">San Francisco, CA</div>
        <div class="posted">Posted 2024-03-01</div>
        <p>We are looking for a talented software engineer...</p>
    </body>
    </html>
    """


@pytest.fixture
def make_prompter():
    """Factory for ScriptedPrompter instances."""
    return ScriptedPrompter
