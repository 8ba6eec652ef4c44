"""
Direct Message Endpoints.

Sending messages, conversation list and threads, read receipts, and the
Server-Sent Events stream carrying live ``INSERT``/``UPDATE`` events.
"""

import asyncio
from typing import Dict, List

from fastapi import APIRouter, Request, status
from sse_starlette.sse import EventSourceResponse

from classifieds.core.database.entities.messages import Message
from classifieds.core.errors import NotFoundError, ValidationFailedError
from classifieds.core.logging_config import get_logger
from classifieds.core.models.domain.enums import MessageEventType
from classifieds.core.models.io.common import ActionResult, CountRead
from classifieds.core.models.io.messages import (
    ConversationRead,
    MessageCreate,
    MessageEvent,
    MessageRead,
    ThreadMessageRead,
)
from classifieds.core.models.io.profiles import UserInfoRead
from classifieds.server.services.deps import BrokerDep, PrincipalDep, ReposDep
from classifieds.server.services.listings import summaries

logger = get_logger(__name__)

router = APIRouter()

STREAM_POLL_SECONDS = 15.0


@router.post(
    "",
    response_model=ActionResult[MessageRead],
    status_code=status.HTTP_201_CREATED,
    summary="Send Message",
    description="Send a message to another user, optionally about a listing.",
    responses={400: {"description": "Missing receiver or text, or message to oneself"}},
)
async def send_message(
    body: MessageCreate, principal: PrincipalDep, repos: ReposDep, broker: BrokerDep
) -> ActionResult[MessageRead]:
    """
    Send a message.

    The receiver's open message streams get an `INSERT` event.
    """
    text = (body.message or "").strip()
    if not body.receiver_id or not text:
        raise ValidationFailedError("Destinataire et message requis")
    if body.receiver_id == principal.id:
        raise ValidationFailedError("Vous ne pouvez pas vous envoyer un message")
    if await repos.users.get_by_id(body.receiver_id) is None:
        raise NotFoundError("Destinataire introuvable")

    message = await repos.messages.create(
        Message(sender_id=principal.id, receiver_id=body.receiver_id, listing_id=body.listing_id or None, message=text)
    )
    payload = MessageRead.model_validate(message)
    broker.publish(message.receiver_id, MessageEvent(type=MessageEventType.insert.value, message=payload))
    return ActionResult(data=payload)


@router.get(
    "/conversations",
    response_model=List[ConversationRead],
    summary="List Conversations",
    description="One entry per counterpart, most recent exchange first.",
)
async def get_conversations(principal: PrincipalDep, repos: ReposDep) -> List[ConversationRead]:
    messages = await repos.messages.involving(principal.id)

    latest: Dict[str, Message] = {}
    unread: Dict[str, int] = {}
    for message in messages:
        other_id = message.receiver_id if message.sender_id == principal.id else message.sender_id
        latest.setdefault(other_id, message)
        if message.receiver_id == principal.id and not message.read:
            unread[other_id] = unread.get(other_id, 0) + 1

    emails = await repos.users.emails_by_id(latest.keys())
    listings = await summaries(repos, (message.listing_id for message in latest.values()))
    return [
        ConversationRead(
            user_id=other_id,
            user_email=emails.get(other_id, "Utilisateur inconnu"),
            last_message=message.message,
            last_message_date=message.created_at,
            listing=listings.get(message.listing_id) if message.listing_id else None,
            unread_count=unread.get(other_id, 0),
        )
        for other_id, message in latest.items()
    ]


@router.get(
    "/unread-count",
    response_model=CountRead,
    summary="Unread Message Count",
)
async def get_unread_count(principal: PrincipalDep, repos: ReposDep) -> CountRead:
    return CountRead(count=await repos.messages.unread_count(principal.id))


@router.get(
    "/users/{user_id}/info",
    response_model=UserInfoRead,
    summary="Counterpart Info",
    description="Display name and avatar of a user, falling back to their email.",
)
async def get_user_info(user_id: str, principal: PrincipalDep, repos: ReposDep) -> UserInfoRead:
    profile = await repos.profiles.get_by_user_id(user_id)
    if profile is not None and profile.business_name:
        return UserInfoRead(business_name=profile.business_name, avatar_url=profile.avatar_url)
    user = await repos.users.get_by_id(user_id)
    return UserInfoRead(business_name=user.email if user else "Utilisateur", avatar_url=None)


@router.get(
    "/stream",
    summary="Message Stream",
    description="Server-Sent Events: `INSERT` for messages I receive, `UPDATE` when my sent messages are read.",
)
async def stream_messages(request: Request, principal: PrincipalDep, broker: BrokerDep):
    user_id = principal.id

    async def event_generator():
        async with broker.subscribe(user_id) as queue:
            while True:
                if await request.is_disconnected():
                    logger.info(f"Client disconnected from message stream: {user_id}")
                    break
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=STREAM_POLL_SECONDS)
                except asyncio.TimeoutError:
                    continue
                yield {"event": event.type, "data": event.model_dump_json()}

    return EventSourceResponse(event_generator())


@router.get(
    "/{other_user_id}",
    response_model=List[ThreadMessageRead],
    summary="Get Conversation",
    description="Messages exchanged with one user, oldest first.",
)
async def get_messages(other_user_id: str, principal: PrincipalDep, repos: ReposDep) -> List[ThreadMessageRead]:
    messages = await repos.messages.thread(principal.id, other_user_id)
    listings = await summaries(repos, (message.listing_id for message in messages))
    thread = []
    for message in messages:
        item = ThreadMessageRead.model_validate(message)
        item.listing = listings.get(message.listing_id) if message.listing_id else None
        thread.append(item)
    return thread


@router.post(
    "/{other_user_id}/read",
    response_model=CountRead,
    summary="Mark Conversation Read",
    description="Mark every unread message from a user as read; the sender's streams get `UPDATE` events.",
)
async def mark_as_read(other_user_id: str, principal: PrincipalDep, repos: ReposDep, broker: BrokerDep) -> CountRead:
    changed = await repos.messages.mark_thread_read(receiver_id=principal.id, sender_id=other_user_id)
    for message in changed:
        broker.publish(
            message.sender_id,
            MessageEvent(type=MessageEventType.update.value, message=MessageRead.model_validate(message)),
        )
    return CountRead(count=len(changed))
