import sys
from typing import Dict, Optional

from .env import Settings, load_env
from .errors import (
    ConfigError,
    ExtractionError,
    FetchError,
    FetchHTTPError,
    FetchNetworkError,
    FetchSetupError,
    NotFoundError,
    StoreError,
    TrackerError,
)
from .extractor import ExtractedFields, FieldExtractor, OpenAIExtractor
from .fetcher import ListingFetcher, body_excerpt, page_text
from .logger import StructuredLogger, get_logger
from .prompts import Prompter
from .schema import STATUSES, coerce_status
from .store import JobRecord, JobStore

MENU_ADD = "Add Job"
MENU_LIST = "List Jobs"
MENU_UPDATE = "Update Job Status"
MENU_DELETE = "Delete Job"
MENU_EXIT = "Exit"
MENU_CHOICES = [MENU_ADD, MENU_LIST, MENU_UPDATE, MENU_DELETE, MENU_EXIT]


def format_job(job: JobRecord) -> str:
    return "\n".join([
        f"ID: {job.id}",
        f"  Title: {job.title}",
        f"  Company: {job.company}",
        f"  Location: {job.location}",
        f"  URL: {job.url}",
        f"  Date Posted: {job.date_posted}",
        f"  Status: {job.status}",
    ])


class JobTracker:
    """Interactive workflow over a JobStore.

    Runs one flow at a time: the main menu loop dispatches to add, list,
    update and delete until the user picks Exit, which closes the store.
    """

    def __init__(
        self,
        store: JobStore,
        fetcher: ListingFetcher,
        extractor: FieldExtractor,
        prompter: Prompter,
        logger: Optional[StructuredLogger] = None,
        max_prompt_chars: int = 12000,
    ):
        self.store = store
        self.fetcher = fetcher
        self.extractor = extractor
        self.prompter = prompter
        self.logger = logger or get_logger()
        self.max_prompt_chars = max_prompt_chars
        self.actions = {
            MENU_ADD: self.add_job,
            MENU_LIST: self.list_jobs,
            MENU_UPDATE: self.update_job_status,
            MENU_DELETE: self.delete_job,
        }

    def run(self) -> None:
        """Present the main menu until Exit."""
        while True:
            choice = self.prompter.select("What would you like to do?", MENU_CHOICES)
            if choice == MENU_EXIT:
                self.store.close()
                return
            try:
                self.actions[choice]()
            except NotFoundError as e:
                self.logger.warning(str(e), job_id=e.job_id)
            except TrackerError as e:
                self.logger.record_error(type(e).__name__)
                self.logger.error(f"{choice} failed: {e}", error_type=type(e).__name__)

    # Add-job flow

    def add_job(self) -> Optional[int]:
        """Fetch a listing, let the user confirm the fields, then store it.

        Returns the new job id, or None when the flow stopped early.
        """
        url = self.prompter.text("Enter the job listing URL:").strip()

        try:
            html = self.fetcher.fetch(url)
        except FetchError as e:
            self._report_fetch_failure(e)
            return None

        extracted = self._extract(html)
        confirmed = self._confirm(extracted, url)

        try:
            job_id = self.store.insert(**confirmed)
        except StoreError as e:
            self.logger.record_error(type(e).__name__)
            self.logger.error("Failed to save job", error=str(e))
            return None

        self.logger.record_job_change("added")
        print(f"Inserted job with ID: {job_id}")
        return job_id

    def _report_fetch_failure(self, error: FetchError) -> None:
        if isinstance(error, FetchHTTPError):
            self.logger.error(
                f"Failed to fetch listing: HTTP error status {error.status_code}",
                url=error.url,
                status=error.status_code,
                body=body_excerpt(error.body),
            )
        elif isinstance(error, FetchNetworkError):
            self.logger.error(
                "Failed to fetch listing: request was made but no response received",
                url=error.url,
                error=str(error),
            )
        elif isinstance(error, FetchSetupError):
            self.logger.error(
                "Failed to fetch listing: error setting up the request",
                url=error.url,
                error=str(error),
            )
        else:
            self.logger.error("Failed to fetch listing", url=error.url, error=str(error))

    def _extract(self, html: str) -> ExtractedFields:
        try:
            return self.extractor.extract(page_text(html, self.max_prompt_chars))
        except (ExtractionError, ConfigError) as e:
            self.logger.record_extraction_failure(type(e).__name__)
            self.logger.warning(f"Could not extract job details, enter them by hand: {e}")
            return ExtractedFields()

    def _confirm(self, extracted: ExtractedFields, url: str) -> Dict[str, str]:
        ask = self.prompter.text
        return {
            "title": ask("Job Title:", extracted.job_title),
            "company": ask("Company:", extracted.company),
            "location": ask("Location:", extracted.location),
            "url": ask("Job URL:", url),
            "date_posted": ask("Date Posted:", extracted.date_posted),
            "status": self.prompter.select(
                "Application Status:", STATUSES, default=coerce_status(extracted.status)
            ),
        }

    # Store-backed menu actions

    def list_jobs(self) -> int:
        """Print every tracked job. Returns how many were printed."""
        count = 0
        for job in self.store.list_all():
            print(format_job(job))
            print()
            count += 1
        if count == 0:
            print("No jobs tracked yet.")
        return count

    def update_job_status(self) -> int:
        job_id = self._ask_job_id()
        if job_id is None:
            return 0
        status = self.prompter.select("New status:", STATUSES)
        affected = self.store.update_status(job_id, status)
        print(f"Row(s) updated: {affected}")
        if affected == 0:
            raise NotFoundError(job_id)
        self.logger.record_job_change("updated")
        return affected

    def delete_job(self) -> int:
        job_id = self._ask_job_id()
        if job_id is None:
            return 0
        affected = self.store.delete(job_id)
        print(f"Row(s) deleted: {affected}")
        if affected == 0:
            raise NotFoundError(job_id)
        self.logger.record_job_change("deleted")
        return affected

    def _ask_job_id(self) -> Optional[int]:
        raw = self.prompter.text("Job ID:").strip()
        try:
            return int(raw)
        except ValueError:
            self.logger.warning("Job ID must be a whole number", value=raw)
            return None


def main() -> int:
    # Load .env if present (OPENAI_API_KEY, JOBTRACKER_DB, etc.)
    load_env()
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; job details will have to be entered by hand.")

    store = JobStore(settings.db_path, logger=logger)
    try:
        store.initialize()
    except StoreError as e:
        logger.error("Could not open the job database", db_path=str(settings.db_path), error=str(e))
        return 1
    logger.info("Connected to the job tracker database.", db_path=str(settings.db_path))

    tracker = JobTracker(
        store=store,
        fetcher=ListingFetcher(timeout=settings.http_timeout, logger=logger),
        extractor=OpenAIExtractor(settings, logger=logger),
        prompter=Prompter(),
        logger=logger,
        max_prompt_chars=settings.max_prompt_chars,
    )
    try:
        tracker.run()
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130
    finally:
        if not store.closed:
            store.close()
        logger.log_metrics_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())
