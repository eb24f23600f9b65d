"""
SQLAlchemy ORM Models.

Maps finished agent runs and their steps to database tables.
"""
from datetime import datetime
from sqlalchemy import (
    Column, String, DateTime, Integer, Numeric, Text, Index, ForeignKey, JSON
)
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()


# =============================================================================
# AGENT EXECUTION MODEL
# =============================================================================

class AgentExecutionModel(Base):
    """
    Agent execution database model.

    One row per finished agent run, with savings estimates denormalized for
    the dashboard.
    """

    __tablename__ = "agent_executions"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    agent_id = Column(String(100), nullable=False, index=True)
    agent_name = Column(String(255), nullable=False)

    status = Column(String(20), nullable=False, index=True)
    progress = Column(Integer, nullable=False, default=0)

    input_data = Column(JSON, nullable=True)
    output_data = Column(JSON, nullable=True)
    error_message = Column(Text, nullable=True)
    execution_time_ms = Column(Integer, nullable=True)

    cost_saved_usd = Column(Numeric(10, 2), nullable=False, default=0)
    time_saved_minutes = Column(Integer, nullable=False, default=0)
    integrations_used = Column(JSON, nullable=False, default=list)

    started_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    steps = relationship(
        "ExecutionStepModel",
        back_populates="execution",
        cascade="all, delete-orphan",
        order_by="ExecutionStepModel.position",
    )

    __table_args__ = (
        Index("ix_agent_executions_user_started", "user_id", "started_at"),
    )

    def __repr__(self):
        return f"<AgentExecution(id={self.id}, agent={self.agent_id}, status={self.status})>"


# =============================================================================
# EXECUTION STEP MODEL
# =============================================================================

class ExecutionStepModel(Base):
    """Execution step database model."""

    __tablename__ = "execution_steps"

    id = Column(String(64), primary_key=True)
    execution_id = Column(String(64), ForeignKey("agent_executions.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    step_name = Column(String(500), nullable=False)
    step_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False)
    integration = Column(String(100), nullable=True)

    output_data = Column(JSON, nullable=True)
    error_message = Column(Text, nullable=True)

    started_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    execution = relationship("AgentExecutionModel", back_populates="steps")

    def __repr__(self):
        return f"<ExecutionStep(id={self.id}, type={self.step_type}, status={self.status})>"
