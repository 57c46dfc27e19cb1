# common/logger/logger_middleware/middleware_types.py
"""
Type definitions for request logging middleware.
"""

from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field, computed_field


class PerformanceBreakdown(BaseModel):
    """Where the time went while serving one request."""

    total_ms: float
    app_logic_ms: float
    sql_execution_total_ms: float
    query_count: int = Field(0, description="Number of SQL statements executed")


class RequestMetadata(BaseModel):
    """
    Core request metadata - always captured.
    """

    method: str = Field(..., description="HTTP method (GET, POST, etc.)")
    path: str = Field(..., description="Request path without query params")
    status_code: int = Field(..., ge=100, le=599, description="HTTP status code")
    duration_ms: float = Field(
        ..., ge=0, description="Request duration in milliseconds"
    )

    model_config = {"frozen": True}


class RequestDetails(BaseModel):
    """
    Who called which endpoint. Optional, configurable.

    ``route`` is the matched path template (``/patients/{patient_id}``) so
    log lines for the same endpoint group together; ``user_name`` is only
    set on routes behind the bearer token check.
    """

    request_id: Optional[str] = None
    route: Optional[str] = None
    endpoint: Optional[str] = None
    user_name: Optional[str] = None
    client_host: Optional[str] = None
    user_agent: Optional[str] = None
    query_params: Optional[Dict[str, Any]] = None
    path_params: Optional[Dict[str, Any]] = None
    content_length: Optional[int] = Field(None, ge=0)

    model_config = {"frozen": True}


class RequestLogEntry(BaseModel):
    """
    Complete request log entry combining metadata and optional details.
    """

    timestamp: datetime = Field(default_factory=datetime.now)
    metadata: RequestMetadata
    details: Optional[RequestDetails] = None
    performance: Optional[PerformanceBreakdown] = None
    slow_threshold_ms: float = Field(1000.0, gt=0, exclude=True)

    model_config = {"frozen": True}

    @computed_field
    def is_slow(self) -> bool:
        return self.metadata.duration_ms > self.slow_threshold_ms

    @computed_field
    def is_error(self) -> bool:
        """Server side failures (5xx)."""
        return self.metadata.status_code >= 500

    @computed_field
    def optimization_warnings(self) -> list[str]:
        """
        Hints about avoidable database work.

        Listing appointments should cost one joined query; a high
        statement count usually means a relationship was lazy loaded.
        """
        warns: list[str] = []
        if not self.performance:
            return warns

        query_count = self.performance.query_count
        sql_time = self.performance.sql_execution_total_ms

        if query_count > 10:
            warns.append(
                f"N+1_QUERY_SUSPECTED: {query_count} queries "
                f"(likely missing eager loading)"
            )
        elif query_count > 5:
            warns.append(f"HIGH_QUERY_COUNT: {query_count} queries")

        if sql_time > self.slow_threshold_ms / 2:
            warns.append(f"SLOW_SQL: statements took {sql_time:.0f}ms")

        return warns


__all__ = [
    "RequestMetadata",
    "RequestDetails",
    "RequestLogEntry",
    "PerformanceBreakdown",
]
