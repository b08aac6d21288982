"""
Tests for the upstream employee directory client.

The client talks to the in-memory FakeUpstream through httpx.MockTransport.
"""

import json

import httpx
import pytest

from employee_api.clients.employee_client import EmployeeClient
from employee_api.core.exceptions import (
    RateLimitedError,
    UpstreamError,
    UpstreamResponseError,
)
from employee_api.schemas.employee import EmployeeCreate


class TestListAll:
    """Test suite for fetching the full employee list"""

    @pytest.mark.asyncio()
    async def test_list_all_translates_upstream_fields(self, employee_client):
        """Test upstream employee_* fields are mapped to the public names"""
        employees = await employee_client.list_all()

        assert [employee.id for employee in employees] == ["1", "2"]
        john = employees[0]
        assert john.name == "John Doe"
        assert john.salary == 50000
        assert john.age == 22
        assert john.title == "Doctor"
        assert john.email == "drjohndoe@hospital.com"

    @pytest.mark.asyncio()
    async def test_list_all_empty(self, employee_client, upstream):
        """Test an empty upstream list yields an empty result"""
        upstream.records = []

        assert await employee_client.list_all() == []

    @pytest.mark.asyncio()
    async def test_list_all_server_error_raises_upstream_error(self, employee_client, upstream):
        """Test upstream 5xx is surfaced as UpstreamError with the status code"""
        upstream.forced_status["GET"] = 503

        with pytest.raises(UpstreamError) as exc_info:
            await employee_client.list_all()

        assert exc_info.value.status_code == 503
        assert not isinstance(exc_info.value, RateLimitedError)

    @pytest.mark.asyncio()
    async def test_list_all_not_found_is_an_error(self, employee_client, upstream):
        """Test 404 on the list endpoint is an error, not an empty list"""
        upstream.forced_status["GET"] = 404

        with pytest.raises(UpstreamError):
            await employee_client.list_all()

    @pytest.mark.asyncio()
    async def test_list_all_rate_limited(self, employee_client, upstream):
        """Test upstream 429 raises RateLimitedError"""
        upstream.forced_status["GET"] = 429

        with pytest.raises(RateLimitedError) as exc_info:
            await employee_client.list_all()

        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio()
    async def test_list_all_malformed_envelope(self):
        """Test a body without the data envelope fails with a structured parse error"""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"employees": []}))
        async with httpx.AsyncClient(transport=transport) as http_client:
            client = EmployeeClient(http_client, base_url="http://upstream.test/api/v1/employee")

            with pytest.raises(UpstreamResponseError) as exc_info:
                await client.list_all()

        assert "data" in exc_info.value.detail

    @pytest.mark.asyncio()
    async def test_list_all_wrong_field_type(self, employee_client, upstream, make_record):
        """Test a record with a non-numeric salary is rejected at the boundary"""
        record = make_record("3", "Bad Salary", 0)
        record["employee_salary"] = "a lot"
        upstream.records.append(record)

        with pytest.raises(UpstreamResponseError):
            await employee_client.list_all()

    @pytest.mark.asyncio()
    async def test_list_all_non_json_body(self):
        """Test a non-JSON body is reported as UpstreamResponseError"""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
        async with httpx.AsyncClient(transport=transport) as http_client:
            client = EmployeeClient(http_client, base_url="http://upstream.test/api/v1/employee")

            with pytest.raises(UpstreamResponseError):
                await client.list_all()

    @pytest.mark.asyncio()
    async def test_list_all_unreachable(self):
        """Test transport failures become UpstreamError"""
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as http_client:
            client = EmployeeClient(http_client, base_url="http://upstream.test/api/v1/employee")

            with pytest.raises(UpstreamError) as exc_info:
                await client.list_all()

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)


class TestGetById:
    """Test suite for single-record lookup"""

    @pytest.mark.asyncio()
    async def test_get_by_id_found(self, employee_client):
        """Test a known id returns the record"""
        employee = await employee_client.get_by_id("2")

        assert employee is not None
        assert employee.name == "Jane Smith"
        assert employee.salary == 60000

    @pytest.mark.asyncio()
    async def test_get_by_id_not_found_returns_none(self, employee_client):
        """Test upstream 404 becomes None, not an error"""
        assert await employee_client.get_by_id("does-not-exist") is None

    @pytest.mark.asyncio()
    async def test_get_by_id_server_error(self, employee_client, upstream):
        """Test non-404 failures propagate"""
        upstream.forced_status["GET"] = 500

        with pytest.raises(UpstreamError):
            await employee_client.get_by_id("1")

    @pytest.mark.asyncio()
    async def test_get_by_id_requests_id_path(self, employee_client, upstream):
        """Test the id is appended to the base URL"""
        await employee_client.get_by_id("2")

        assert upstream.calls("GET")[0].url.path == "/api/v1/employee/2"


class TestCreate:
    """Test suite for employee creation"""

    @pytest.mark.asyncio()
    async def test_create_posts_public_field_names(self, employee_client, upstream):
        """Test the create body carries name, salary, age and title"""
        request = EmployeeCreate(name="Ada Lovelace", title="Engineer", salary=90000, age=36)

        await employee_client.create(request)

        body = json.loads(upstream.calls("POST")[0].content)
        assert body == {"name": "Ada Lovelace", "title": "Engineer", "salary": 90000, "age": 36}

    @pytest.mark.asyncio()
    async def test_create_returns_upstream_record(self, employee_client):
        """Test the returned employee echoes submitted values plus upstream id and email"""
        request = EmployeeCreate(name="Ada Lovelace", title="Engineer", salary=90000, age=36)

        employee = await employee_client.create(request)

        assert employee.name == "Ada Lovelace"
        assert employee.title == "Engineer"
        assert employee.salary == 90000
        assert employee.age == 36
        assert employee.id
        assert employee.email == "ada@company.test"

    @pytest.mark.asyncio()
    async def test_create_upstream_failure(self, employee_client, upstream):
        """Test a rejected create raises UpstreamError"""
        upstream.forced_status["POST"] = 400
        request = EmployeeCreate(name="Ada Lovelace", title="Engineer", salary=90000, age=36)

        with pytest.raises(UpstreamError) as exc_info:
            await employee_client.create(request)

        assert exc_info.value.status_code == 400


class TestDeleteById:
    """Test suite for delete-by-id, which deletes upstream by name"""

    @pytest.mark.asyncio()
    async def test_delete_resolves_name_then_deletes(self, employee_client, upstream):
        """Test the delete call is keyed by the resolved employee name"""
        assert await employee_client.delete_by_id("1") is True

        delete_calls = upstream.calls("DELETE")
        assert len(delete_calls) == 1
        assert json.loads(delete_calls[0].content) == {"name": "John Doe"}
        assert [record["id"] for record in upstream.records] == ["2"]

    @pytest.mark.asyncio()
    async def test_delete_unknown_id_skips_delete_call(self, employee_client, upstream):
        """Test an unresolvable id returns False without calling delete"""
        assert await employee_client.delete_by_id("missing") is False
        assert upstream.calls("DELETE") == []

    @pytest.mark.asyncio()
    async def test_delete_nameless_employee_skips_delete_call(self, employee_client, upstream, make_record):
        """Test a record without a name returns False without calling delete"""
        upstream.records.append(make_record("3", None, 1000))

        assert await employee_client.delete_by_id("3") is False
        assert upstream.calls("DELETE") == []

    @pytest.mark.asyncio()
    async def test_delete_returns_upstream_false(self, employee_client, upstream):
        """Test an upstream data=false is reported as-is"""
        def handler(request):
            if request.method == "DELETE":
                return httpx.Response(200, json={"data": False})
            return upstream.handler(request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = EmployeeClient(http_client, base_url="http://upstream.test/api/v1/employee")
            assert await client.delete_by_id("1") is False

    @pytest.mark.asyncio()
    async def test_delete_non_boolean_data_is_false(self, employee_client, upstream):
        """Test only a literal boolean true counts as deleted"""
        def handler(request):
            if request.method == "DELETE":
                return httpx.Response(200, json={"data": "true"})
            return upstream.handler(request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = EmployeeClient(http_client, base_url="http://upstream.test/api/v1/employee")
            assert await client.delete_by_id("1") is False

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("status_code", [400, 429, 500])
    async def test_delete_upstream_error_is_swallowed(self, employee_client, upstream, status_code):
        """Test failures of the delete call itself are reported as False"""
        upstream.forced_status["DELETE"] = status_code

        assert await employee_client.delete_by_id("1") is False
        assert len(upstream.calls("DELETE")) == 1

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("status_code", [429, 400, 403])
    async def test_delete_lookup_client_error_is_false(self, employee_client, upstream, status_code):
        """Test a 4xx during the lookup is reported as not deleted"""
        upstream.forced_status["GET"] = status_code

        assert await employee_client.delete_by_id("1") is False
        assert upstream.calls("DELETE") == []

    @pytest.mark.asyncio()
    async def test_delete_lookup_server_error_propagates(self, employee_client, upstream):
        """Test a 5xx during the lookup is not swallowed"""
        upstream.forced_status["GET"] = 500

        with pytest.raises(UpstreamError):
            await employee_client.delete_by_id("1")
        assert upstream.calls("DELETE") == []
