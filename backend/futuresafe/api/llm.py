import json
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from futuresafe.api.deps import get_engine, get_generator
from futuresafe.models.schemas import ChatReply, ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["llm"])


def chat_prompt(message: str, report: Optional[dict]) -> str:
    if report is None:
        return message
    return (
        "WEBSITE SECURITY SCAN DATA:\n"
        f"{json.dumps(report, indent=2)}\n\n"
        "USER QUESTION:\n"
        f"{message}\n\n"
        "Answer based on the website scan above."
    )


@router.post("/chat", response_model=ChatReply)
async def chat(body: ChatRequest, generate=Depends(get_generator), engine=Depends(get_engine)):
    """
    Answer a question, grounding it in a fresh risk scan when the page URL is supplied.
    """
    if not body.message.strip():
        raise HTTPException(status_code=400, detail="No message provided")

    report = None
    if body.url is not None:
        scanned = await engine.scan(body.url, body.page_text)
        report = scanned.model_dump(by_alias=True)

    try:
        reply = await generate(chat_prompt(body.message, report))
    except Exception as e:
        logger.error("Chat completion failed: %r", e)
        raise HTTPException(status_code=500, detail=f"LLM error: {e}")
    return ChatReply(reply=reply)
