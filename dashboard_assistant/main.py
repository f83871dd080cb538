"""
Main application module for the dashboard assistant.

This module defines the FastAPI application, routes, and middleware.
"""
import os
from typing import Dict, List

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from dashboard_assistant.schemas.responses import ChatResponse, InterpretResponse, Message
from dashboard_assistant.services.catalogue import get_default_catalogue
from dashboard_assistant.services.error_handler import ErrorHandler
from dashboard_assistant.services.interpreter import CommandSource
from dashboard_assistant.services.pipeline import build_command_source, process_query
from dashboard_assistant.services.session import ChatSession
from dashboard_assistant.services.view_state import DashboardViewState

# Create FastAPI app
app = FastAPI(
    title="Dashboard Assistant",
    description="Natural language commands for the well monitoring dashboard",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

catalogue = get_default_catalogue()
error_handler = ErrorHandler()
command_source = build_command_source(catalogue, error_handler=error_handler)
view_state = DashboardViewState(catalogue)
chat_session = ChatSession(
    command_source,
    on_actions=view_state.apply,
    error_handler=error_handler,
    catalogue=catalogue
)


def get_command_source() -> CommandSource:
    return command_source


def get_chat_session() -> ChatSession:
    return chat_session


def get_view_state() -> DashboardViewState:
    return view_state


def get_error_handler() -> ErrorHandler:
    return error_handler


def _extract_query(request: Dict) -> str:
    # Accept either 'query' or 'message' field for compatibility
    query = request.get("query") or request.get("message")
    if not isinstance(query, str) or not query.strip():
        raise HTTPException(status_code=400, detail="Missing 'query' or 'message' field")
    return query.strip()


@app.get("/ping")
@app.head("/ping")
async def ping():
    """Health check endpoint. Supports both GET and HEAD methods."""
    return {"status": "ok"}


@app.post("/interpret", response_model=InterpretResponse)
async def interpret(
    request: Dict = Body(...),
    source: CommandSource = Depends(get_command_source)
):
    """
    Interpret a query and return the command contract without applying it.

    Args:
        request: Request body containing either 'query' or 'message' field

    Returns:
        InterpretResponse with reply, actions and the interpreter that answered
    """
    query = _extract_query(request)
    try:
        outcome = await process_query(query, source)
    except Exception as e:
        print(f"Error interpreting '{query}': {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
    return InterpretResponse(
        reply=outcome.result.reply,
        actions=outcome.result.actions,
        source=outcome.source,
        is_fallback=outcome.is_fallback
    )


@app.post("/chat", response_model=ChatResponse)
async def chat(
    request: Dict = Body(...),
    session: ChatSession = Depends(get_chat_session)
):
    """
    Run one chat turn: interpret the query, apply its actions, record the reply.

    Args:
        request: Request body containing either 'query' or 'message' field

    Returns:
        ChatResponse with the appended message and its action tags
    """
    query = _extract_query(request)
    if session.busy:
        raise HTTPException(status_code=409, detail="Another query is still being answered")

    turn = await session.send(query)
    if turn is None:
        raise HTTPException(status_code=409, detail="Query was not accepted")

    message = turn.message
    outcome = turn.outcome
    return ChatResponse(
        message=message,
        tags=session.describe(message.actions or []),
        source=outcome.source if outcome else None,
        is_fallback=outcome.is_fallback if outcome else False
    )


@app.get("/messages", response_model=List[Message])
async def messages(session: ChatSession = Depends(get_chat_session)):
    """Return the chat transcript, oldest first."""
    return session.messages


@app.get("/state")
async def state(current: DashboardViewState = Depends(get_view_state)):
    """Return the dashboard view-state the chat actions were applied to."""
    return current.snapshot()


@app.get("/stats")
async def stats(handler: ErrorHandler = Depends(get_error_handler)):
    """Return remote command failures that were answered locally."""
    return handler.get_error_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dashboard_assistant.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000"))
    )
