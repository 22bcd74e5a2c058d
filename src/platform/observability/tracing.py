"""
OpenTelemetry wiring for the API process.

Spans from the use cases are always created through the global tracer; they
are only exported once `setup()` installs a provider with an exporter (OTLP
when an endpoint is configured, console on request).
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# Probes never produce spans
EXCLUDED_URLS = 'health,metrics'


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        console: bool | None = None,
        sample_ratio: float | None = None,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.console = settings.OTEL_CONSOLE_EXPORT if console is None else console
        ratio = settings.OTEL_SAMPLE_RATIO if sample_ratio is None else sample_ratio
        self.sample_ratio = min(max(ratio, 0.0), 1.0)
        self._provider: TracerProvider | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.otlp_endpoint) or self.console

    def _processors(self) -> list[SpanProcessor]:
        processors: list[SpanProcessor] = []
        if self.otlp_endpoint:
            processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_endpoint)))
        if self.console:
            processors.append(BatchSpanProcessor(ConsoleSpanExporter()))
        return processors

    def setup(self) -> None:
        if not self.enabled:
            Logger.base.info('📊 [Tracing] No exporter configured, spans stay local')
            return

        resource = Resource.create(
            {SERVICE_NAME: self.service_name, SERVICE_VERSION: settings.VERSION}
        )
        self._provider = TracerProvider(
            resource=resource, sampler=ParentBased(TraceIdRatioBased(self.sample_ratio))
        )
        for processor in self._processors():
            self._provider.add_span_processor(processor)

        trace.set_tracer_provider(self._provider)
        Logger.base.info(
            f'📊 [Tracing] Exporting spans for {self.service_name} '
            f'(otlp={self.otlp_endpoint or "-"}, console={self.console}, '
            f'ratio={self.sample_ratio})'
        )

    def instrument_fastapi(self, *, app: Any) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)

    def instrument_sqlalchemy(self, *, engine: Any) -> None:
        # AsyncEngine proxies a sync engine, which is what the instrumentor hooks into
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        if self._provider is not None:
            self._provider.shutdown()
            self._provider = None
