"""Table definitions for the interaction log."""

from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

log_metadata = MetaData()

JSONDocument = JSON().with_variant(JSONB(), "postgresql")

plan_generator_logs = Table(
    "plan_generator_logs",
    log_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("timestamp", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("company_name", Text),
    Column("job_description", Text),
    Column("job_description_length", Integer, nullable=False, default=0),
    Column("is_url", Boolean, nullable=False, default=False),
    Column("plan", Text),
    Column("plan_length", Integer, nullable=False, default=0),
    Column("job_fit", Text),
    Column("job_fit_length", Integer, nullable=False, default=0),
    Column("metadata", JSONDocument),
    Column("error", Text),
)

chatbot_logs = Table(
    "chatbot_logs",
    log_metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("timestamp", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("message", Text),
    Column("message_length", Integer, nullable=False, default=0),
    Column("conversation_history_length", Integer, nullable=False, default=0),
    Column("response", Text),
    Column("response_length", Integer, nullable=False, default=0),
    Column("metadata", JSONDocument),
    Column("error", Text),
)

Index("idx_plan_logs_timestamp", plan_generator_logs.c.timestamp.desc())
Index("idx_chatbot_logs_timestamp", chatbot_logs.c.timestamp.desc())
