import logging
from pydantic import ValidationError
from app.models.webhook import WebhookEvent, UserEventPayload, DeletedUserPayload, WebhookResult
from app.custom_error import InvalidPayload, MissingIdentifier
from app.services.reconciler import UserReconciler

logger = logging.getLogger("uvicorn.error")

UPSERT_EVENTS = ("user.created", "user.updated")
DELETE_EVENT = "user.deleted"


class EventDispatcher:

    @classmethod
    def parse_event(cls, raw_event) -> WebhookEvent:
        try:
            return WebhookEvent.model_validate(raw_event)
        except ValidationError as e:
            logger.error(f"❌ Webhook envelope is malformed: {e.error_count()} error(s)")
            raise InvalidPayload("Invalid event envelope")

    @classmethod
    def parse_user_payload(cls, event: WebhookEvent) -> UserEventPayload:
        try:
            payload = UserEventPayload.model_validate(event.data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            logger.error(f"❌ Invalid data structure for {event.type}: {fields}")
            raise InvalidPayload()

        if not payload.id:
            logger.error(f"❌ User ID is missing from {event.type}")
            raise MissingIdentifier()
        return payload

    @classmethod
    def parse_deleted_payload(cls, event: WebhookEvent) -> str:
        try:
            payload = DeletedUserPayload.model_validate(event.data)
        except ValidationError:
            payload = None

        if payload is None or not payload.id:
            logger.error(f"❌ User ID is missing from {event.type}")
            raise MissingIdentifier()
        return payload.id

    @classmethod
    async def dispatch(cls, raw_event) -> WebhookResult:
        event = cls.parse_event(raw_event)

        if event.type in UPSERT_EVENTS:
            payload = cls.parse_user_payload(event)
            await UserReconciler.create_or_update(
                payload.id,
                payload.first_name,
                payload.last_name,
                payload.image_url,
                payload.email_addresses,
                payload.username,
            )
            return WebhookResult(status="success", message="User is created or updated", event_type=event.type)

        if event.type == DELETE_EVENT:
            clerk_id = cls.parse_deleted_payload(event)
            await UserReconciler.delete(clerk_id)
            return WebhookResult(status="success", message="User is deleted", event_type=event.type)

        logger.info(f"ℹ️ Ignored event type: {event.type}")
        return WebhookResult(status="ignored", message="Webhook received but no action taken", event_type=event.type)
