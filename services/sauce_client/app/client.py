# services/sauce_client/app/client.py
import json
import logging
from typing import Any, List

import httpx
from pydantic import ValidationError

from core.config import settings
from core.models import (
    Sauce, MessageResponse, VoteKind, VoteRequest,
    ImageUpload, SauceImage
)
from core.utils import normalize_sauce, normalize_sauces
from .broadcaster import SauceBroadcaster
from .errors import (
    SauceClientError, ServerError, translate_http_error,
    MALFORMED_RESPONSE_MESSAGE
)
from .identity import UserIdentity

logger = logging.getLogger("Piquante_Core").getChild("SauceClient")


class SaucesClient:
    """
    Data-access layer for the /sauces resource.

    list_sauces(), create_sauce() and update_sauce() publish normalized
    snapshots to the broadcaster. Every operation raises SauceClientError on
    failure except list_sauces(), which logs and publishes an empty list.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        identity: UserIdentity,
        broadcaster: SauceBroadcaster,
        api_url: str = settings.API_URL,
    ):
        self.http_client = http_client
        self.identity = identity
        self.broadcaster = broadcaster
        self.sauces_url = f"{api_url.rstrip('/')}/sauces"

    # --- Transport helpers ---

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http_client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            error = translate_http_error(e)
            logger.debug(f"{method} {url} failed: {error.message}")
            raise error from e

    @staticmethod
    def _payload(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Non-JSON body from {response.request.url} (Status: {response.status_code})")
            raise ServerError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code) from e

    def _parse_sauce(self, response: httpx.Response) -> Sauce:
        payload = self._payload(response)
        try:
            return Sauce.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Sauce payload failed validation: {e}")
            raise ServerError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code) from e

    def _parse_sauce_list(self, response: httpx.Response) -> List[Sauce]:
        payload = self._payload(response)
        if not isinstance(payload, list):
            logger.error(f"Expected a list of sauces, got {type(payload).__name__}")
            raise ServerError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code)
        sauces = []
        # One unreadable item must not cost subscribers the rest of the catalog
        for index, item in enumerate(payload):
            try:
                sauces.append(Sauce.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping sauce #{index} in list response, failed validation: {e}")
        return sauces

    def _parse_message(self, response: httpx.Response) -> MessageResponse:
        payload = self._payload(response)
        try:
            return MessageResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Acknowledgement payload failed validation: {e}")
            raise ServerError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code) from e

    @staticmethod
    def _multipart(sauce: Sauce, image: ImageUpload) -> dict:
        return {
            "data": {"sauce": json.dumps(sauce.to_wire())},
            "files": {"image": image.as_multipart()},
        }

    def _publish_single(self, sauce: Sauce) -> None:
        self.broadcaster.publish([normalize_sauce(sauce)])

    # --- Operations ---

    async def list_sauces(self) -> None:
        """Fetches the catalog and publishes it. Never raises for API failures."""
        logger.info(f"Fetching sauce list from {self.sauces_url}")
        try:
            response = await self._send("GET", self.sauces_url)
            sauces = self._parse_sauce_list(response)
        except SauceClientError as e:
            # List failures stay local: subscribers get an empty catalog and the
            # caller sees success. All other operations raise instead.
            logger.error(f"Failed to fetch sauce list: {e.message}")
            self.broadcaster.publish([])
            return
        logger.info(f"Fetched {len(sauces)} sauce(s).")
        self.broadcaster.publish(normalize_sauces(sauces))

    async def get_sauce(self, sauce_id: str) -> Sauce:
        url = f"{self.sauces_url}/{sauce_id}"
        logger.info(f"Fetching sauce {sauce_id}")
        response = await self._send("GET", url)
        return normalize_sauce(self._parse_sauce(response))

    async def create_sauce(self, sauce: Sauce, image: ImageUpload) -> MessageResponse:
        logger.info(f"Creating sauce '{sauce.name}' with image '{image.filename}'")
        response = await self._send("POST", self.sauces_url, **self._multipart(sauce, image))
        ack = self._parse_message(response)
        logger.info(f"Sauce '{sauce.name}' created: {ack.message}")
        self._publish_single(sauce)
        return ack

    async def update_sauce(self, sauce_id: str, sauce: Sauce, image: SauceImage) -> MessageResponse:
        url = f"{self.sauces_url}/{sauce_id}"
        if image.kind == "unchanged":
            logger.info(f"Updating sauce {sauce_id} (metadata only)")
            response = await self._send("PUT", url, json=sauce.to_wire())
        else:
            logger.info(f"Updating sauce {sauce_id} with new image '{image.filename}'")
            response = await self._send("PUT", url, **self._multipart(sauce, image))
        ack = self._parse_message(response)
        logger.info(f"Sauce {sauce_id} updated: {ack.message}")
        self._publish_single(sauce)
        return ack

    async def delete_sauce(self, sauce_id: str) -> MessageResponse:
        """Deletes a sauce. Does not broadcast; call list_sauces() to refresh subscribers."""
        url = f"{self.sauces_url}/{sauce_id}"
        logger.info(f"Deleting sauce {sauce_id}")
        response = await self._send("DELETE", url)
        ack = self._parse_message(response)
        logger.info(f"Sauce {sauce_id} deleted: {ack.message}")
        return ack

    async def vote(self, sauce_id: str, direction: bool, kind: VoteKind) -> bool:
        """
        Asserts (direction=True) or retracts (direction=False) the current
        user's like or dislike. Sends +1/-1 for an assertion depending on
        kind, 0 for a retraction, and returns direction unchanged.
        """
        user_id = self.identity.get_user_id()
        if user_id is None:
            logger.warning(f"Voting on sauce {sauce_id} without a signed-in user id.")
        vote = VoteRequest(user_id=user_id, like=kind.sign if direction else 0)
        url = f"{self.sauces_url}/{sauce_id}/like"
        logger.info(f"Sending {kind.value} vote {vote.like} for sauce {sauce_id}")
        await self._send("POST", url, json=vote.model_dump(by_alias=True))
        return direction

    async def like_sauce(self, sauce_id: str, like: bool) -> bool:
        return await self.vote(sauce_id, like, VoteKind.LIKE)

    async def dislike_sauce(self, sauce_id: str, dislike: bool) -> bool:
        return await self.vote(sauce_id, dislike, VoteKind.DISLIKE)
