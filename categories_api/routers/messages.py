from fastapi import APIRouter, Depends

from categories_api.models import InboundMessage, OutboundMessage
from categories_api.processor import MessageProcessor

router = APIRouter(prefix="/messages")


@router.post("", response_model=OutboundMessage)
async def process_message(
    message: InboundMessage,
    processor: MessageProcessor = Depends(),
) -> OutboundMessage:
    return await processor.process(message)
