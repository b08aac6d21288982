"""
Pytest Configuration and Shared Fixtures

This module contains shared test fixtures and configuration for all test modules.
The upstream employee directory is replaced by an in-memory fake served through
httpx.MockTransport, so no network is involved.
"""

import json
import os
import uuid

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

UPSTREAM_BASE_URL = "http://upstream.test/api/v1/employee"
UPSTREAM_BASE_PATH = "/api/v1/employee"

os.environ["ENVIRONMENT"] = "test"
os.environ["UPSTREAM_BASE_URL"] = UPSTREAM_BASE_URL

from employee_api.api.dependencies import get_http_client
from employee_api.clients.employee_client import EmployeeClient
from employee_api.main import app


def upstream_record(
    employee_id: str,
    name: str | None,
    salary: int,
    age: int = 30,
    title: str | None = "Engineer",
    email: str | None = None
) -> dict:
    """Build an employee record in the upstream wire format."""
    return {
        "id": employee_id,
        "employee_name": name,
        "employee_salary": salary,
        "employee_age": age,
        "employee_title": title,
        "employee_email": email,
    }


class FakeUpstream:
    """In-memory stand-in for the upstream employee directory.

    `forced_status` maps an HTTP method to a status code the fake answers
    with instead of serving the request.
    """

    def __init__(self, records: list[dict] | None = None):
        self.records = list(records or [])
        self.requests: list[httpx.Request] = []
        self.forced_status: dict[str, int] = {}

    def calls(self, method: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        forced = self.forced_status.get(request.method)
        if forced is not None:
            return httpx.Response(forced, json={"status": "forced error"})

        path = request.url.path
        if path == UPSTREAM_BASE_PATH:
            if request.method == "GET":
                return httpx.Response(200, json={"data": self.records, "status": "ok"})
            if request.method == "POST":
                return self._create(json.loads(request.content))
            if request.method == "DELETE":
                return self._delete(json.loads(request.content))

        if path.startswith(UPSTREAM_BASE_PATH + "/") and request.method == "GET":
            employee_id = path[len(UPSTREAM_BASE_PATH) + 1:]
            for record in self.records:
                if record["id"] == employee_id:
                    return httpx.Response(200, json={"data": record, "status": "ok"})
            return httpx.Response(404, json={"status": "Not Found"})

        return httpx.Response(405, json={"status": "Method Not Allowed"})

    def _create(self, body: dict) -> httpx.Response:
        record = upstream_record(
            str(uuid.uuid4()),
            body["name"],
            body["salary"],
            age=body["age"],
            title=body["title"],
            email=f"{body['name'].split()[0].lower()}@company.test",
        )
        self.records.append(record)
        return httpx.Response(200, json={"data": record, "status": "ok"})

    def _delete(self, body: dict) -> httpx.Response:
        for record in self.records:
            if record["employee_name"] == body.get("name"):
                self.records.remove(record)
                return httpx.Response(200, json={"data": True, "status": "ok"})
        return httpx.Response(200, json={"data": False, "status": "ok"})


@pytest.fixture()
def make_record():
    """Factory for upstream-format employee records"""
    return upstream_record


@pytest.fixture()
def sample_records():
    """Two-employee directory used across tests"""
    return [
        upstream_record("1", "John Doe", 50000, age=22, title="Doctor", email="drjohndoe@hospital.com"),
        upstream_record("2", "Jane Smith", 60000, age=35, title="Nurse", email="jsmith@hospital.com"),
    ]


@pytest.fixture()
def fifteen_records():
    """Fifteen employees with distinct salaries 1000..15000, in ascending order"""
    return [
        upstream_record(str(index), f"Employee {index}", index * 1000)
        for index in range(1, 16)
    ]


@pytest.fixture()
def upstream(sample_records):
    """Fake upstream preloaded with the two sample employees"""
    return FakeUpstream(sample_records)


@pytest_asyncio.fixture
async def upstream_http_client(upstream):
    """httpx client whose transport is the fake upstream"""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)) as http_client:
        yield http_client


@pytest.fixture()
def employee_client(upstream_http_client):
    """EmployeeClient talking to the fake upstream"""
    return EmployeeClient(upstream_http_client, base_url=UPSTREAM_BASE_URL)


@pytest_asyncio.fixture(scope="function")
async def client(upstream_http_client):
    """Test client for the API, wired to the fake upstream"""
    app.dependency_overrides[get_http_client] = lambda: upstream_http_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
