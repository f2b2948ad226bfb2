#!/usr/bin/env python3
"""One-shot job: refresh department names from the public geo API.

Run with ``python -m france_geo.helpers.sync_departments``.
"""

from typing import Iterable

import requests

from france_geo.core.config import settings
from france_geo.db.session import db_manager
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.utils.logger import get_logger


logger = get_logger("sync_departments")


def fetch_departments(url: str = None, timeout: int = None) -> list[dict]:
    """Return the ``[{"code": ..., "nom": ...}]`` payload of the API."""
    url = url or settings.sync.departments_api_url
    timeout = timeout or settings.sync.timeout_seconds
    logger.info(f"Calling {url}")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, list):
        raise ValueError(f"Unexpected payload from {url}: expected a list")
    return payload


def apply_department_names(uow: UnitOfWork, remote: Iterable[dict]) -> int:
    """Rename stored departments whose name differs; return how many changed."""
    updated = 0
    with uow:
        for item in remote:
            code, name = item.get("code"), item.get("nom")
            if not code or not name:
                continue
            department = uow.departments.get_by_code(code)
            if department is None:
                logger.info(f"Department not stored: {code} - {name}")
                continue
            if department.department_name != name:
                logger.info(
                    f"Updated {code}: '{department.department_name}' -> '{name}'"
                )
                department.department_name = name
                updated += 1
    return updated


def sync_department_names() -> int:
    remote = fetch_departments()
    logger.info(f"Fetched {len(remote)} departments from the API")
    session = db_manager.SessionLocal()
    try:
        updated = apply_department_names(UnitOfWork(session), remote)
    finally:
        session.close()
    logger.info(f"Departments updated: {updated}")
    return updated


if __name__ == "__main__":
    sync_department_names()
