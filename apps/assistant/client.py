"""Text completion client for the AI helpers (Google Gemini)."""
import logging

from django.conf import settings
from google import genai
from tenacity import RetryError, Retrying, retry_if_exception, stop_after_attempt, wait_incrementing

logger = logging.getLogger(__name__)

OVERLOADED = 503


class AIServiceError(Exception):
    pass


def _is_overloaded(exc):
    return getattr(exc, 'code', None) == OVERLOADED or getattr(exc, 'status', None) == OVERLOADED


def _log_retry(retry_state):
    logger.warning(
        f"Gemini API overloaded (attempt {retry_state.attempt_number}), retrying"
    )


class TextGenerationClient:
    """Opaque prompt-in, text-out service.

    Only "overloaded" (503) responses are retried; anything else fails on
    the first attempt.
    """

    def __init__(self, api_key=None, model=None, max_retries=None, retry_wait=None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.max_retries = max_retries or settings.AI_MAX_RETRIES
        self.retry_wait = settings.AI_RETRY_WAIT if retry_wait is None else retry_wait
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate_text(self, prompt: str) -> str:
        if not self.api_key:
            raise AIServiceError('Missing GEMINI_API_KEY')

        retryer = Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_incrementing(start=self.retry_wait, increment=self.retry_wait),
            retry=retry_if_exception(_is_overloaded),
            before_sleep=_log_retry,
        )

        try:
            for attempt in retryer:
                with attempt:
                    response = self.client.models.generate_content(
                        model=self.model,
                        contents=prompt
                    )
        except RetryError as e:
            raise AIServiceError('Gemini API overloaded. Please try again later.') from e
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise AIServiceError(str(e)) from e

        text = (response.text or '').strip()
        if not text:
            raise AIServiceError('Gemini returned an empty response')
        return text
