"""HTTP meal writer - Implements IMealWriter port.

Persists a meal against a PostgREST-style relational API:
1. upsert the user's profile row,
2. insert the meal and read back its id,
3. insert the food lines referencing that id.

Error classification (consumed by the offline queue):
- transport errors, 5xx, 408, 429, 401, 403 -> TransientSendError
- any other 4xx -> PermanentSendError
- meal inserted without a readable id -> PermanentSendError (a retry
  would insert a second meal row)
- no signed-in user -> NotAuthenticatedError (transient)

A per-instance circuit breaker opens after repeated transient failures
so that a flush during an outage fails fast instead of waiting on every
entry. While open, save() raises CircuitBreakerError.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from circuitbreaker import CircuitBreaker

from domain.offline.core.entities.meal_submission import MealSubmission
from domain.offline.core.exceptions.domain_errors import (
    NotAuthenticatedError,
    PermanentSendError,
    TransientSendError,
)

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = {401, 403, 408, 429}


class HttpMealWriter:
    """
    Remote meal writer implementing IMealWriter port.

    Example:
        >>> async with HttpMealWriter(base_url, api_key) as writer:
        ...     writer.set_identity(user_id, email, access_token)
        ...     await writer.save(submission)
    """

    TIMEOUT_S = 10.0

    def __init__(
        self,
        base_url: str,
        api_key: str,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
    ) -> None:
        """
        Initialize writer.

        Args:
            base_url: Root URL of the API (without /rest/v1)
            api_key: Public API key sent as the apikey header
            failure_threshold: Transient failures before the circuit opens
            recovery_timeout: Seconds the circuit stays open
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._session: Optional[httpx.AsyncClient] = None
        self._user_id: Optional[str] = None
        self._user_email: Optional[str] = None
        self._access_token: Optional[str] = None

        self._breaker = CircuitBreaker(
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
            expected_exception=TransientSendError,
            name="remote_meal_writer",
        )
        self._guarded_save = self._breaker(self._save)

    async def __aenter__(self) -> "HttpMealWriter":
        """Async context manager entry."""
        self._session = httpx.AsyncClient(timeout=httpx.Timeout(self.TIMEOUT_S))
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._session:
            await self._session.aclose()
            self._session = None

    @property
    def circuit_open(self) -> bool:
        """True while sends are short-circuited."""
        return bool(self._breaker.opened)

    def set_identity(
        self,
        user_id: str,
        email: Optional[str],
        access_token: str,
    ) -> None:
        """Attach the signed-in user obtained from the auth provider."""
        self._user_id = user_id
        self._user_email = email
        self._access_token = access_token

    def clear_identity(self) -> None:
        """Forget the user (sign-out)."""
        self._user_id = None
        self._user_email = None
        self._access_token = None

    async def save(self, submission: MealSubmission) -> None:
        """
        Create the meal and its food lines remotely.

        Implements IMealWriter.save() port.

        Args:
            submission: Meal to persist

        Raises:
            TransientSendError: Retry later
            PermanentSendError: Payload rejected
            CircuitBreakerError: Too many recent transient failures
        """
        if not self._session:
            raise RuntimeError("Writer not initialized. Use async context manager.")
        if not self._user_id or not self._access_token:
            raise NotAuthenticatedError()

        await self._guarded_save(submission)

    async def _save(self, submission: MealSubmission) -> None:
        await self._post(
            "profiles",
            {"id": self._user_id, "email": self._user_email},
            prefer="resolution=merge-duplicates",
        )

        response = await self._post(
            "meals",
            {
                "user_id": self._user_id,
                "date": submission.date,
                "meal_type": submission.meal_type.value,
                "meal_name": submission.meal_name,
            },
            prefer="return=representation",
        )
        meal_id = self._extract_id(response)

        rows = self._food_rows(meal_id, submission)
        if rows:
            try:
                await self._post("food_items", rows)
            except (TransientSendError, PermanentSendError):
                await self._discard_meal(meal_id)
                raise

        logger.info(
            "Meal saved remotely",
            extra={"meal_id": meal_id, "date": submission.date, "item_count": len(rows)},
        )

    @staticmethod
    def _food_rows(meal_id: str, submission: MealSubmission) -> List[Dict[str, Any]]:
        return [
            {
                "meal_id": meal_id,
                "name": item.name,
                "quantity": item.quantity,
                "calories": item.calories,
                "protein": item.protein,
                "carbs": item.carbs,
                "fat": item.fat,
                "barcode": item.barcode,
                "image_url": item.image_url or submission.image_url,
                "source": item.source.value,
            }
            for item in submission.items
        ]

    @staticmethod
    def _extract_id(response: httpx.Response) -> str:
        # The meal row exists but cannot be addressed: retrying would insert
        # it again, so the entry is rejected instead.
        try:
            body = response.json()
            row = body[0] if isinstance(body, list) else body
            return str(row["id"])
        except (ValueError, LookupError, TypeError) as e:
            logger.error(
                "Meal inserted but no id returned, cannot attach food lines",
                extra={"table": "meals", "status": response.status_code, "error": str(e)},
            )
            raise PermanentSendError(
                f"Meal insert returned no id: {e}", status_code=response.status_code
            ) from e

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _post(self, table: str, payload: Any, prefer: Optional[str] = None) -> httpx.Response:
        assert self._session is not None
        url = f"{self._base_url}/rest/v1/{table}"
        try:
            response = await self._session.post(url, json=payload, headers=self._headers(prefer))
        except httpx.TransportError as e:
            logger.warning("Remote store unreachable", extra={"table": table, "error": str(e)})
            raise TransientSendError(f"Cannot reach remote store: {e}") from e

        self._raise_for_status(table, response)
        return response

    async def _discard_meal(self, meal_id: str) -> None:
        # Best effort: a leftover meal would be duplicated by the next retry.
        assert self._session is not None
        url = f"{self._base_url}/rest/v1/meals"
        try:
            response = await self._session.delete(
                url, params={"id": f"eq.{meal_id}"}, headers=self._headers()
            )
            if response.status_code >= 400:
                logger.warning(
                    "Could not discard partial meal",
                    extra={"meal_id": meal_id, "status": response.status_code},
                )
        except httpx.TransportError as e:
            logger.warning(
                "Could not discard partial meal",
                extra={"meal_id": meal_id, "error": str(e)},
            )

    @staticmethod
    def _raise_for_status(table: str, response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return

        message = f"{table}: HTTP {status} {response.text[:200]}"
        if status >= 500 or status in _RETRYABLE_STATUS:
            logger.warning("Remote store refused write", extra={"table": table, "status": status})
            raise TransientSendError(message, status_code=status)

        logger.error("Remote store rejected payload", extra={"table": table, "status": status})
        raise PermanentSendError(message, status_code=status)
