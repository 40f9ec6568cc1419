from __future__ import annotations

import logging
from dataclasses import dataclass

from app.projekt.modules.customers.service import CustomerService
from app.projekt.modules.projects.models import Project
from app.projekt.repository import Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectService:
    projects: Repository[Project]
    customer_service: CustomerService

    def get_all_projects(self) -> list[Project]:
        return self.projects.get_all()

    def get_project_by_id(self, project_id: int) -> Project | None:
        return self.projects.get_by_id(project_id)

    def create_project(self, project_name: str, customer_name: str) -> Project:
        """
        Attach the project to the customer matching customer_name (any case),
        creating that customer first if there is none.

        The two writes are separate save cycles: if the project insert fails
        after a new customer was stored, the customer stays.
        """
        customer = self.customer_service.get_customer_by_name(customer_name)
        if customer is None:
            customer = self.customer_service.create_customer(customer_name)

        project = Project(name=project_name, customer_id=customer.id, customer=customer)
        self.projects.add(project)
        logger.info("Created project id=%s name=%r customer_id=%s", project.id, project.name, customer.id)
        return project

    def update_project(self, project_id: int, new_name: str) -> bool:
        """Rename a project. Returns False (and writes nothing) when the id is unknown."""
        project = self.projects.get_by_id(project_id)
        if project is None:
            logger.debug("Project id=%s not found; update skipped", project_id)
            return False
        project.name = new_name
        self.projects.update(project)
        return True

    def delete_project(self, project_id: int) -> bool:
        return self.projects.delete(project_id)
