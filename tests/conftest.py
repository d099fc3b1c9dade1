from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.errors import ConflictError
from app.main import app
from app.services.openai_client import get_ai_client
from app.services.store_service import (
    get_admin_user_service,
    get_application_service,
    get_client_service,
    get_job_service,
    get_user_service,
)


class InMemoryStore:
    """Tables as lists of dicts; timestamps strictly increase per insert."""

    def __init__(self) -> None:
        self.tables: Dict[str, List[dict]] = {
            "admin_users": [], "users": [], "jobs": [], "applications": [], "clients": [],
        }
        self._ids: Dict[str, int] = {name: 0 for name in self.tables}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def insert(self, table: str, row: dict) -> dict:
        self._ids[table] += 1
        stored = {"id": self._ids[table], **row}
        self.tables[table].append(stored)
        return stored

    def find(self, table: str, row_id: int) -> Optional[dict]:
        return next((row for row in self.tables[table] if row["id"] == row_id), None)

    def newest_first(self, table: str) -> List[dict]:
        return sorted(self.tables[table], key=lambda row: row["created_at"], reverse=True)


class FakeAdminUserService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def create(self, email: str, password_hash: str) -> dict:
        if any(row["email"] == email for row in self.store.tables["admin_users"]):
            raise ConflictError("Email already exists")
        row = self.store.insert("admin_users", {
            "email": email, "password_hash": password_hash, "created_at": self.store.now(),
        })
        return {"id": row["id"], "email": row["email"]}

    def get_by_email(self, email: str) -> Optional[dict]:
        return next((dict(row) for row in self.store.tables["admin_users"] if row["email"] == email), None)


USER_FIELDS = ("id", "full_name", "email", "phone", "created_at")


class FakeUserService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _public(self, row: dict) -> dict:
        return {key: row[key] for key in USER_FIELDS}

    def create(self, full_name: str, email: str, password_hash: str, phone: Optional[str]) -> dict:
        if any(row["email"] == email for row in self.store.tables["users"]):
            raise ConflictError("Email already exists")
        row = self.store.insert("users", {
            "full_name": full_name, "email": email, "password_hash": password_hash,
            "phone": phone, "created_at": self.store.now(),
        })
        return self._public(row)

    def list(self) -> List[dict]:
        return [self._public(row) for row in self.store.newest_first("users")]

    def get(self, user_id: int) -> Optional[dict]:
        row = self.store.find("users", user_id)
        return self._public(row) if row else None

    def delete(self, user_id: int) -> Optional[int]:
        row = self.store.find("users", user_id)
        if not row:
            return None
        self.store.tables["users"].remove(row)
        self.store.tables["applications"] = [
            a for a in self.store.tables["applications"] if a["user_id"] != user_id
        ]
        return user_id


class FakeJobService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def list(self) -> List[dict]:
        return [dict(row) for row in self.store.newest_first("jobs")]

    def create(self, fields: Dict[str, Any]) -> dict:
        created = self.store.now()
        row = self.store.insert("jobs", {
            **fields, "client_id": None, "created_at": created, "updated_at": created,
        })
        return dict(row)

    def get(self, job_id: int) -> Optional[dict]:
        row = self.store.find("jobs", job_id)
        return dict(row) if row else None

    def update(self, job_id: int, fields: Dict[str, Any]) -> Optional[dict]:
        row = self.store.find("jobs", job_id)
        if not row:
            return None
        for key in ("title", "department", "description", "requirements", "status", "created_by"):
            if fields.get(key) is not None:
                row[key] = fields[key]
        row["updated_at"] = self.store.now()
        return dict(row)

    def delete(self, job_id: int) -> Optional[int]:
        row = self.store.find("jobs", job_id)
        if not row:
            return None
        self.store.tables["jobs"].remove(row)
        return job_id


class FakeApplicationService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _joined(self, row: dict, with_user: bool = True, with_job: bool = True) -> dict:
        result = dict(row)
        if with_user:
            user = self.store.find("users", row["user_id"]) or {}
            result["full_name"] = user.get("full_name")
            result["email"] = user.get("email")
        if with_job:
            job = self.store.find("jobs", row["job_id"]) or {}
            result["job_title"] = job.get("title")
        return result

    def list(self) -> List[dict]:
        return [self._joined(row) for row in self.store.newest_first("applications")]

    def get(self, application_id: int) -> Optional[dict]:
        row = self.store.find("applications", application_id)
        return self._joined(row) if row else None

    def create(self, fields: Dict[str, Any]) -> dict:
        for row in self.store.tables["applications"]:
            if row["user_id"] == fields["user_id"] and row["job_id"] == fields["job_id"]:
                raise ConflictError("User has already applied to this job")
        row = self.store.insert("applications", {**fields, "created_at": self.store.now()})
        return dict(row)

    def list_for_job(self, job_id: int) -> List[dict]:
        return [
            self._joined(row, with_job=False)
            for row in self.store.newest_first("applications") if row["job_id"] == job_id
        ]

    def list_for_user(self, user_id: int) -> List[dict]:
        return [
            self._joined(row, with_user=False)
            for row in self.store.newest_first("applications") if row["user_id"] == user_id
        ]

    def latest_for_user(self, user_id: int) -> Optional[dict]:
        rows = self.list_for_user(user_id)
        if not rows:
            return None
        latest = rows[0]
        return {key: latest.get(key) for key in ("ai_parsed_data", "status", "created_at", "job_title")}


class FakeClientService:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def list(self) -> List[dict]:
        clients = []
        for row in self.store.newest_first("clients"):
            jobs_count = sum(
                1 for job in self.store.tables["jobs"]
                if job.get("client_id") == row["id"] or job.get("department") == row["company"]
            )
            clients.append({**row, "jobs_count": jobs_count})
        return clients

    def create(self, company: str, contact_person: Optional[str], email: Optional[str]) -> dict:
        if any(row["company"] == company for row in self.store.tables["clients"]):
            raise ConflictError("company already exists")
        row = self.store.insert("clients", {
            "company": company, "contact_person": contact_person, "email": email,
            "created_at": self.store.now(),
        })
        return dict(row)


class FakeAIClient:
    """Returns a canned reply and records every prompt it was sent."""

    def __init__(self, reply: str = "{}") -> None:
        self.reply = reply
        self.calls: List[dict] = []

    def complete(self, system_prompt: str, user_content: str, temperature: float = 0.2) -> str:
        self.calls.append({"system": system_prompt, "user": user_content, "temperature": temperature})
        return self.reply


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def ai_client() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture
def client(store: InMemoryStore, ai_client: FakeAIClient):
    app.dependency_overrides[get_admin_user_service] = lambda: FakeAdminUserService(store)
    app.dependency_overrides[get_user_service] = lambda: FakeUserService(store)
    app.dependency_overrides[get_job_service] = lambda: FakeJobService(store)
    app.dependency_overrides[get_application_service] = lambda: FakeApplicationService(store)
    app.dependency_overrides[get_client_service] = lambda: FakeClientService(store)
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client(client: TestClient):
    app.dependency_overrides[get_ai_client] = lambda: None
    return client
