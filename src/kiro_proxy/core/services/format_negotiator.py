"""
Format negotiation against the Kiro backend.

The negotiator walks the cartesian product of candidate bodies, credential
encodings and content types, posting each combination until the backend
answers with HTTP 200. Correctness is operational: the right request shape
is whichever one the backend accepts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from kiro_proxy.core.common.logging_utils import redact
from kiro_proxy.core.constants import (
    AMZ_TARGET,
    CONTENT_TYPE_AMZ_JSON,
    CONTENT_TYPE_JSON,
    DEFAULT_ATTEMPT_TIMEOUT,
    USER_AGENT,
)
from kiro_proxy.core.domain.negotiation import (
    Accepted,
    BackendOutcome,
    CandidateBody,
    CredentialEncoding,
    NegotiationAttempt,
    Rejected,
)

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIAL_ENCODINGS: tuple[CredentialEncoding, ...] = (
    CredentialEncoding.BEARER,
    CredentialEncoding.RAW,
)
DEFAULT_CONTENT_TYPES: tuple[str, ...] = (CONTENT_TYPE_JSON, CONTENT_TYPE_AMZ_JSON)


def build_attempt_space(
    candidates: Sequence[CandidateBody],
    credentials: Sequence[CredentialEncoding] = DEFAULT_CREDENTIAL_ENCODINGS,
    content_types: Sequence[str] = DEFAULT_CONTENT_TYPES,
) -> list[NegotiationAttempt]:
    """Enumerate attempts: candidate outermost, then credential, then content type."""
    return [
        NegotiationAttempt(body=body, content_type=content_type, credential=credential)
        for body in candidates
        for credential in credentials
        for content_type in content_types
    ]


def aggregate_rejections(rejections: Sequence[Rejected]) -> Rejected:
    """Fold the per-attempt rejections into the final negotiation outcome.

    The last attempt's status wins. When the last attempt never got an HTTP
    status, the most recent observed status is reported instead.
    """
    if not rejections:
        return Rejected(status_code=None, error="no candidates to try")

    last = rejections[-1]
    if last.status_code is not None:
        return last

    for rejection in reversed(rejections):
        if rejection.status_code is not None:
            return Rejected(
                status_code=rejection.status_code,
                body=rejection.body,
                error=last.error,
            )
    return last


class FormatNegotiator:
    """Searches the attempt space for a request format the backend accepts."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        attempt_timeout: float = DEFAULT_ATTEMPT_TIMEOUT,
        concurrent: bool = False,
        credentials: Sequence[CredentialEncoding] = DEFAULT_CREDENTIAL_ENCODINGS,
        content_types: Sequence[str] = DEFAULT_CONTENT_TYPES,
    ) -> None:
        """
        Args:
            client: Shared HTTP client used for every attempt.
            attempt_timeout: Timeout in seconds for a single attempt.
            concurrent: Issue all attempts at once instead of one by one.
            credentials: Credential encodings to try, in order.
            content_types: Content types to try, in order.
        """
        self.client = client
        self.attempt_timeout = attempt_timeout
        self.concurrent = concurrent
        self.credentials = tuple(credentials)
        self.content_types = tuple(content_types)

    def build_headers(self, attempt: NegotiationAttempt, token: str) -> dict[str, str]:
        return {
            "Content-Type": attempt.content_type,
            "Authorization": attempt.credential.authorization_header(token),
            "User-Agent": USER_AGENT,
            "Accept": CONTENT_TYPE_JSON,
            "X-Amz-Target": AMZ_TARGET,
        }

    async def negotiate(
        self,
        candidates: Sequence[CandidateBody],
        credential_token: str,
        backend_url: str,
    ) -> BackendOutcome:
        """Probe the backend until one attempt is accepted.

        Args:
            candidates: Candidate bodies in preference order.
            credential_token: The caller's access token.
            backend_url: The backend endpoint to post to.

        Returns:
            ``Accepted`` for the first attempt answered with HTTP 200, or the
            aggregate ``Rejected`` once every attempt has failed.
        """
        attempts = build_attempt_space(candidates, self.credentials, self.content_types)
        logger.info(
            "Negotiating backend format: %d attempts (token %s)",
            len(attempts),
            redact(credential_token),
        )

        if self.concurrent:
            outcome = await self._negotiate_concurrently(
                attempts, credential_token, backend_url
            )
        else:
            outcome = await self._negotiate_sequentially(
                attempts, credential_token, backend_url
            )

        if isinstance(outcome, Accepted) and outcome.attempt is not None:
            logger.info("Backend accepted format %s", outcome.attempt.describe())
        elif isinstance(outcome, Rejected):
            logger.warning(
                "Backend rejected all %d attempts; last status=%s",
                len(attempts),
                outcome.status_code,
            )
        return outcome

    async def _negotiate_sequentially(
        self, attempts: list[NegotiationAttempt], token: str, url: str
    ) -> BackendOutcome:
        rejections: list[Rejected] = []
        for attempt in attempts:
            outcome = await self.try_attempt(attempt, token, url)
            if isinstance(outcome, Accepted):
                return outcome
            rejections.append(outcome)
        return aggregate_rejections(rejections)

    async def _negotiate_concurrently(
        self, attempts: list[NegotiationAttempt], token: str, url: str
    ) -> BackendOutcome:
        # Outcomes are consumed in enumeration order, so the earliest accepted
        # attempt wins even if a later one finishes first.
        tasks = [
            asyncio.create_task(self.try_attempt(attempt, token, url))
            for attempt in attempts
        ]
        rejections: list[Rejected] = []
        try:
            for task in tasks:
                outcome = await task
                if isinstance(outcome, Accepted):
                    return outcome
                rejections.append(outcome)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
        return aggregate_rejections(rejections)

    async def try_attempt(
        self, attempt: NegotiationAttempt, token: str, url: str
    ) -> BackendOutcome:
        """Issue a single attempt; transport failures become ``Rejected``."""
        headers = self.build_headers(attempt, token)
        try:
            response = await self.client.post(
                url,
                content=attempt.body.serialize(),
                headers=headers,
                timeout=self.attempt_timeout,
            )
        except httpx.TimeoutException as e:
            logger.debug("Attempt %s timed out: %s", attempt.describe(), e)
            return Rejected(status_code=None, error=f"timeout: {e}")
        except httpx.HTTPError as e:
            logger.debug("Attempt %s failed: %s", attempt.describe(), e)
            return Rejected(status_code=None, error=str(e) or type(e).__name__)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Attempt %s returned status %d", attempt.describe(), response.status_code
            )

        if response.status_code == 200:
            return Accepted(
                body=response.content,
                status_code=response.status_code,
                attempt=attempt,
            )
        return Rejected(status_code=response.status_code, body=response.content)
