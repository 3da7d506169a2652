from fastapi import APIRouter, Request
from app.models.webhook import WebhookResult
from app.services.verifier import WebhookVerifier
from app.services.dispatcher import EventDispatcher
import logging

router = APIRouter(
    prefix="/webhooks",
    tags=["Webhooks"]
)
logger = logging.getLogger("uvicorn.error")


@router.post("", response_model=WebhookResult)
@router.post("/clerk", response_model=WebhookResult)
async def handle_clerk_webhook(request: Request):
    # Refuse to serve at all without a signing secret, then reject unsigned requests
    WebhookVerifier.check_secret()
    WebhookVerifier.check_headers(request.headers)

    # Read the raw body (must remain unmodified for Svix verification)
    body = await request.body()
    event = WebhookVerifier.verify(body, request.headers)

    result = await EventDispatcher.dispatch(event)
    logger.info(f"Webhook {result.event_type} handled: {result.status}")
    return result
