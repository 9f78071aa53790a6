"""
Conversation log entries shown in the assistant panel.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from .chart import ChartData
from .enums import ChartKind, MessageRole


class ConversationMessage(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    chart_kind: ChartKind | None = None
    chart_data: ChartData | None = None
