"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from pagecraft.accel.dispatcher import AccelerationDispatcher
from pagecraft.editor.session import EditorSession
from pagecraft.monitoring.metrics import MetricsCollector
from pagecraft.schema.processor import SchemaProcessor
from pagecraft.schema.repository import ProjectLibrary
from pagecraft.schema.types import ProjectData

from .config import Settings, get_settings
from .logging_config import configure_logging


class SessionFactory:
    """Creates editor sessions sharing the container's services."""

    def __init__(self, settings: Settings, metrics: MetricsCollector, processor: SchemaProcessor) -> None:
        self.settings = settings
        self.metrics = metrics
        self.processor = processor

    def __call__(self, project: ProjectData | None = None) -> EditorSession:
        return EditorSession(
            project,
            settings=self.settings,
            metrics=self.metrics,
            processor=self.processor,
        )


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings (explicit, else from environment)."""
        settings = self.settings or get_settings()
        configure_logging(settings.log_level, settings.json_logs)
        return settings

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        """Provide metrics collector with its own registry."""
        return MetricsCollector()

    @singleton
    @provider
    def provide_dispatcher(self, settings: Settings, metrics: MetricsCollector) -> AccelerationDispatcher:
        """Provide dispatcher, loading the native accelerator if installed."""
        return AccelerationDispatcher.from_settings(settings, metrics)

    @singleton
    @provider
    def provide_processor(self, dispatcher: AccelerationDispatcher) -> SchemaProcessor:
        return SchemaProcessor(dispatcher)

    @singleton
    @provider
    def provide_library(self, settings: Settings) -> ProjectLibrary:
        return ProjectLibrary.from_settings(settings)

    @singleton
    @provider
    def provide_session_factory(
        self, settings: Settings, metrics: MetricsCollector, processor: SchemaProcessor
    ) -> SessionFactory:
        return SessionFactory(settings, metrics, processor)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
