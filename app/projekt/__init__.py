import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from app.projekt.config import Settings, load_settings
from app.projekt.db import (
    PersistenceContext,
    StorageError,
    create_db_engine,
    create_session_factory,
)
from app.projekt.models import Customer, Project
from app.projekt.modules.customers.service import CustomerService
from app.projekt.modules.projects.service import ProjectService
from app.projekt.repository import Repository


@dataclass(frozen=True)
class Services:
    """Process-lifetime object graph: one context shared by every repository."""

    engine: Engine
    context: PersistenceContext
    customers: CustomerService
    projects: ProjectService

    def close(self) -> None:
        self.context.close()
        self.engine.dispose()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_services(settings: Settings | None = None) -> Services:
    settings = settings or load_settings()

    engine = create_db_engine(settings)
    context = PersistenceContext.from_settings(settings, create_session_factory(engine))
    if settings.db_create_schema:
        try:
            context.init_schema()
        except StorageError:
            context.close()
            engine.dispose()
            raise

    customer_service = CustomerService(Repository(context, Customer))
    project_service = ProjectService(Repository(context, Project), customer_service)

    logging.getLogger(__name__).info("build_services() complete; env=%s", settings.env)
    return Services(
        engine=engine,
        context=context,
        customers=customer_service,
        projects=project_service,
    )
