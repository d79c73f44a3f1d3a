"""
FastAPI application factory.

create_app() receives already-built adapters so tests can pass in-memory or
fake implementations; fastapi_app.py is the composition root that wires the
real ones.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from src.application.agent.graph import build_question_graph
from src.application.agent.prompts import EXAMPLE_QUESTIONS
from src.application.session.chat_session import SessionRegistry
from src.application.use_cases.answer_question import AnswerQuestionUseCase
from src.application.use_cases.get_data_stats import GetDataStatsUseCase
from src.application.use_cases.upload_stock_csv import UploadStockCsvUseCase
from src.domain.entities.conversation import ConversationMessage
from src.domain.errors import BackendWriteError, ParseError
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.stock_repository_port import IStockRepository

logger = logging.getLogger(__name__)


class QuestionRequest(BaseModel):
    question: str


class MessageResponse(BaseModel):
    id: str
    role: str
    content: str
    timestamp: datetime
    sources: Optional[list[str]] = None

    @classmethod
    def from_message(cls, message: ConversationMessage) -> "MessageResponse":
        return cls(
            id=message.id,
            role=message.role.value,
            content=message.content,
            timestamp=message.timestamp,
            sources=list(message.sources) if message.sources else None,
        )


class UploadResponse(BaseModel):
    status: str
    message: str
    count: int


class StatsResponse(BaseModel):
    stock_records: int
    total_queries: int
    transcript_chunks: int
    last_updated: Optional[str] = None


def create_app(
    repository: IStockRepository,
    llm: ILanguageModel,
    observability: IObservabilityHandler,
) -> FastAPI:
    graph = build_question_graph(repository, llm)
    sessions = SessionRegistry(AnswerQuestionUseCase(graph, observability))
    upload_use_case = UploadStockCsvUseCase(repository)
    stats_use_case = GetDataStatsUseCase(repository)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        observability.flush()

    app = FastAPI(title="Stock Chat Dashboard API", lifespan=lifespan)
    app.state.sessions = sessions

    @app.get("/health")
    def health():
        return {"status": "ok", "database": repository.ping()}

    @app.get("/api/stats", response_model=StatsResponse)
    def stats():
        s = stats_use_case.execute()
        return StatsResponse(
            stock_records=s.stock_records,
            total_queries=s.total_queries,
            transcript_chunks=s.transcript_chunks,
            last_updated=s.last_updated,
        )

    @app.get("/api/stocks/available")
    def stocks_available():
        return {"has_data": stats_use_case.has_data()}

    @app.post("/api/upload", response_model=UploadResponse)
    async def upload_stock_csv(file: UploadFile = File(...)):
        """Parse an uploaded CSV and upsert its rows into stock_prices."""
        content = await file.read()
        try:
            count = await run_in_threadpool(
                upload_use_case.execute, content.decode("utf-8-sig", errors="replace")
            )
        except ParseError as exc:
            logger.warning("Rejected upload %r: %s", file.filename, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except BackendWriteError as exc:
            logger.error("Stock upload failed for %r: %s", file.filename, exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return UploadResponse(
            status="success",
            message=f"Successfully uploaded {count} records",
            count=count,
        )

    @app.get("/api/chat/examples")
    async def example_questions():
        return {"questions": list(EXAMPLE_QUESTIONS)}

    @app.post("/api/chat/{session_id}", response_model=MessageResponse)
    async def ask(session_id: str, body: QuestionRequest):
        """Answer a question; only one question per session may be in flight."""
        if not body.question.strip():
            raise HTTPException(status_code=400, detail="Question must not be empty.")
        session = sessions.get(session_id)
        reply = await session.submit(body.question)
        if reply is None:
            raise HTTPException(
                status_code=409,
                detail="A question is already being answered for this session.",
            )
        return MessageResponse.from_message(reply)

    @app.get("/api/chat/{session_id}/messages", response_model=list[MessageResponse])
    async def history(session_id: str):
        return [MessageResponse.from_message(m) for m in sessions.get(session_id).messages]

    return app
