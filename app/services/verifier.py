import json
import logging
from typing import Mapping
from svix.webhooks import Webhook, WebhookVerificationError
from app.custom_error import ConfigurationMissing, MissingHeaders, VerificationFailed
from app.services.config import settings

logger = logging.getLogger("uvicorn.error")

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


class WebhookVerifier:
    """Checks the Svix signing headers and signature of an inbound webhook."""

    @classmethod
    def check_secret(cls) -> str:
        signing_secret = settings.SIGNING_SECRET
        if not signing_secret:
            logger.error("❌ SIGNING_SECRET not set in environment variables")
            raise ConfigurationMissing("SIGNING_SECRET")
        return signing_secret

    @classmethod
    def check_headers(cls, headers: Mapping[str, str]) -> dict:
        """Return the three signing headers, raising if any is absent or empty."""
        svix_headers = {name: headers.get(name) for name in SVIX_HEADERS}
        missing = [name for name, value in svix_headers.items() if not value]
        if missing:
            logger.error(f"❌ Missing required Svix headers: {', '.join(missing)}")
            raise MissingHeaders(missing)
        return svix_headers

    @classmethod
    def verify(cls, body: bytes, headers: Mapping[str, str]):
        """Verify the raw body against the signing headers and return the decoded event.

        The body must be passed exactly as received; re-serializing it breaks the signature.
        """
        wh = Webhook(cls.check_secret())
        svix_headers = cls.check_headers(headers)
        payload = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body

        try:
            wh.verify(payload, svix_headers)
        except WebhookVerificationError as e:
            logger.error(f"❌ Could not verify webhook {svix_headers['svix-id']}: {str(e)}")
            raise VerificationFailed()

        try:
            event = json.loads(payload)
        except json.JSONDecodeError as e:
            # Signature was valid but the body is not JSON
            logger.error(f"❌ Webhook {svix_headers['svix-id']} body is not valid JSON: {str(e)}")
            raise VerificationFailed()

        logger.info(f"Verified webhook {svix_headers['svix-id']}")
        return event
