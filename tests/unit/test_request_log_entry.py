"""Tests for request log classification."""

from common.logger.logger_middleware import (
    PerformanceBreakdown,
    RequestDetails,
    RequestLogEntry,
    RequestMetadata,
)


def entry(status_code=200, duration_ms=20.0, query_count=1, sql_ms=2.0):
    return RequestLogEntry(
        metadata=RequestMetadata(
            method="GET",
            path="/appointments",
            status_code=status_code,
            duration_ms=duration_ms,
        ),
        performance=PerformanceBreakdown(
            total_ms=duration_ms,
            app_logic_ms=duration_ms - sql_ms,
            sql_execution_total_ms=sql_ms,
            query_count=query_count,
        ),
        slow_threshold_ms=1000.0,
    )


class TestRequestLogEntry:
    def test_fast_success(self):
        log = entry()
        assert log.is_slow is False
        assert log.is_error is False
        assert log.optimization_warnings == []

    def test_slow_uses_configured_threshold(self):
        assert entry(duration_ms=1500.0).is_slow is True
        assert entry(duration_ms=999.0).is_slow is False

    def test_client_errors_are_not_server_errors(self):
        assert entry(status_code=404).is_error is False
        assert entry(status_code=500).is_error is True

    def test_many_queries_flag_lazy_loading(self):
        warnings = entry(query_count=12).optimization_warnings
        assert warnings[0].startswith("N+1_QUERY_SUSPECTED")

    def test_slow_sql_flagged(self):
        warnings = entry(duration_ms=900.0, sql_ms=600.0).optimization_warnings
        assert any(w.startswith("SLOW_SQL") for w in warnings)

    def test_dump_hides_threshold_and_keeps_flags(self):
        log = RequestLogEntry(
            metadata=RequestMetadata(
                method="GET", path="/patients/P1", status_code=200, duration_ms=3.0
            ),
            details=RequestDetails(
                request_id="req-1",
                route="/patients/{patient_id}",
                endpoint="get_patient",
                user_name="asha",
            ),
        )
        data = log.model_dump(mode="json", exclude_none=True)

        assert "slow_threshold_ms" not in data
        assert data["is_slow"] is False
        assert data["details"]["route"] == "/patients/{patient_id}"
        assert data["details"]["user_name"] == "asha"
