"""Tests for operation metrics."""

import pytest

from clubify_checkout.core.metrics import MetricsCollector, OperationContext, with_metrics


class Worker:
    metrics_prefix = "worker"

    def __init__(self, metrics):
        self.metrics = metrics

    @with_metrics("run")
    async def run(self, fail=False):
        if fail:
            raise RuntimeError("failed")
        return "done"


class TestMetricsCollector:

    def test_record_aggregates(self):
        collector = MetricsCollector()

        collector.record("offer.create", 10.0)
        collector.record("offer.create", 30.0, failed=True)

        stats = collector.get("offer.create")
        assert stats.calls == 2
        assert stats.errors == 1
        assert stats.average_ms == 20.0
        assert stats.max_ms == 30.0

    def test_unknown_operation_is_empty(self):
        assert MetricsCollector().get("nothing").calls == 0

    def test_snapshot_and_reset(self):
        collector = MetricsCollector()
        collector.record("a", 1.0)

        assert collector.snapshot()["a"]["calls"] == 1

        collector.reset()
        assert collector.snapshot() == {}


class TestOperationContext:

    @pytest.mark.asyncio
    async def test_success_is_recorded(self):
        collector = MetricsCollector()

        async with OperationContext("offer.publish", collector, offer_id="o1") as context:
            context.add_context("status", "active")

        assert collector.get("offer.publish").calls == 1
        assert collector.get("offer.publish").errors == 0
        assert "duration_ms" in context.context

    @pytest.mark.asyncio
    async def test_failure_is_recorded_and_reraised(self):
        collector = MetricsCollector()

        with pytest.raises(RuntimeError):
            async with collector.track("offer.publish"):
                raise RuntimeError("nope")

        assert collector.get("offer.publish").errors == 1

    @pytest.mark.asyncio
    async def test_marked_failure_is_recorded_without_exception(self):
        collector = MetricsCollector()

        async with OperationContext("offer.delete", collector) as context:
            context.mark_failed("status 500")

        assert collector.get("offer.delete").calls == 1
        assert collector.get("offer.delete").errors == 1
        assert context.context["error"] == "status 500"

    @pytest.mark.asyncio
    async def test_decorator_uses_prefix(self):
        collector = MetricsCollector()
        worker = Worker(collector)

        assert await worker.run() == "done"
        with pytest.raises(RuntimeError):
            await worker.run(fail=True)

        stats = collector.get("worker.run")
        assert stats.calls == 2
        assert stats.errors == 1
