# src/pipeline/case_analyzer.py — v1
"""Model invocation adapter: document text in, raw JSON-ish text out.

Failures never escape as exceptions; they come back as a JSON payload with
the same shape the model is asked to produce, so the normalizer handles
them like any other output.
"""

from __future__ import annotations

import asyncio
import json
import logging

from caselens.cache.extraction_cache import meets_threshold
from caselens.config.settings import Settings
from caselens.llm.base_client import BaseLLMClient
from caselens.llm.models import LLMResponse, Message
from caselens.llm.retry import LLMRetryExhausted, with_retry
from caselens.llm.token_budget import truncate_for_budget

logger = logging.getLogger(__name__)

INSUFFICIENT_CONTENT_TITLE = "Document Analysis Error"
PROVIDER_ERROR_TITLE = "API Analysis Error"


def build_system_prompt(template: str, original_length: int, truncated: bool) -> str:
    """Append the document-length note to the prompt template."""
    note = f"\n\nThe document is {original_length} characters long"
    if truncated:
        note += " and has been truncated to fit within token limits."
    else:
        note += "."
    return template + note


def _error_payload(title: str, reasoning: str) -> str:
    return json.dumps({
        "caseTitle": title,
        "successProbability": 50,
        "recommendation": "review",
        "reasoning": reasoning,
    })


def insufficient_content_payload(character_count: int) -> str:
    return _error_payload(
        INSUFFICIENT_CONTENT_TITLE,
        "The document appears to be empty or contains insufficient text for "
        f"analysis ({character_count} characters extracted). Please upload a "
        "document with readable text content.",
    )


def provider_error_payload(error: BaseException) -> str:
    if isinstance(error, LLMRetryExhausted):
        error = error.last_error
    message = str(error) or type(error).__name__
    return _error_payload(
        PROVIDER_ERROR_TITLE,
        f"An error occurred during the analysis: {message}. Please try again later.",
    )


class CaseAnalysisAdapter:
    """Sends one document to the model under the configured budget.

    Args:
        client: LLM client to call.
        settings: Budget, timeout and sampling parameters.
    """

    def __init__(self, client: BaseLLMClient, settings: Settings | None = None) -> None:
        self._client = client
        self._settings = settings or Settings()

    async def analyze(self, document_text: str, system_prompt: str) -> str:
        """Return the model's raw output, or an error payload."""
        s = self._settings
        stripped = len(document_text.strip())
        if not meets_threshold(document_text, s.min_text_chars):
            logger.warning(
                "Document text too short for analysis (%d characters), skipping model call",
                stripped,
            )
            return insufficient_content_payload(stripped)

        budgeted = truncate_for_budget(
            document_text, s.llm_context_token_budget, s.llm_chars_per_token
        )
        system = build_system_prompt(
            system_prompt, budgeted.original_length, budgeted.truncated
        )

        logger.info(
            "Sending request to %s (%s), document length %d characters",
            self._client.provider_name, self._client.model, len(budgeted.text),
        )
        try:
            response = await with_retry(
                self._complete, budgeted.text, system, operation="case_analysis"
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Model call failed: %s", e)
            return provider_error_payload(e)

        logger.info(
            "Model response received: %d output tokens in %d ms",
            response.output_tokens, response.latency_ms,
        )
        return response.content

    async def _complete(self, text: str, system: str) -> LLMResponse:
        s = self._settings
        return await asyncio.wait_for(
            self._client.complete(
                messages=[Message(role="user", content=text)],
                system=system,
                max_tokens=s.llm_max_output_tokens,
                temperature=s.llm_temperature,
                json_mode=True,
            ),
            timeout=s.llm_timeout_seconds,
        )
