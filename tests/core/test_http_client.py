"""Tests for the HTTP transport wrapper."""

import httpx
import pytest

from clubify_checkout.core.exceptions import HttpError


class TestHttpClient:

    @pytest.mark.asyncio
    async def test_sends_auth_and_tenant_headers(self, http_client, api):
        api.add("GET", "/offers/1", body={"id": "1"})

        await http_client.get("offers/1")

        request = api.requests[-1]
        assert request.headers["Authorization"] == "Bearer test-key"
        assert request.headers["X-Tenant-Id"] == "tenant-1"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["User-Agent"].startswith("ClubifyCheckoutSDK-Python/")

    @pytest.mark.asyncio
    async def test_decodes_json_body(self, http_client, api):
        api.add("POST", "/offers", status=201, body={"data": {"id": "1"}})

        response = await http_client.post("offers", json_body={"name": "Course"})

        assert response.status_code == 201
        assert response.data == {"data": {"id": "1"}}
        assert response.is_successful
        assert api.last_json("POST", "/offers") == {"name": "Course"}

    @pytest.mark.asyncio
    async def test_no_content_has_no_data(self, http_client, api):
        api.add("DELETE", "/offers/1", status=204)

        response = await http_client.delete("offers/1")

        assert response.status_code == 204
        assert response.data is None

    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status_and_message(self, http_client, api):
        api.add("PUT", "/offers/1", status=422, body={"message": "Name is required"})

        with pytest.raises(HttpError) as exc_info:
            await http_client.put("offers/1", json_body={})

        error = exc_info.value
        assert error.status_code == 422
        assert error.message == "Name is required"
        assert error.is_client_error
        assert error.response_data == {"message": "Name is required"}

    @pytest.mark.asyncio
    async def test_not_found(self, http_client):
        with pytest.raises(HttpError) as exc_info:
            await http_client.get("offers/missing")

        assert exc_info.value.is_not_found

    @pytest.mark.asyncio
    async def test_server_error(self, http_client, api):
        api.add("GET", "/offers", status=503)

        with pytest.raises(HttpError) as exc_info:
            await http_client.get("offers")

        assert exc_info.value.is_server_error
        assert exc_info.value.message == "HTTP 503 for GET offers"

    @pytest.mark.asyncio
    async def test_query_params_are_cleaned(self, http_client, api):
        api.add("GET", "/offers", body=[])

        await http_client.get("offers", params={"active": True, "ids": ["a", "b"], "skip": None, "limit": 10})

        params = api.requests[-1].url.params
        assert params["active"] == "true"
        assert params["ids"] == "a,b"
        assert params["limit"] == "10"
        assert "skip" not in params

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, http_client, api):
        api.add_handler("GET", "/offers", lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(HttpError) as exc_info:
            await http_client.get("offers")

        assert exc_info.value.response_data == "<html>"

    @pytest.mark.asyncio
    async def test_transport_failure_raises_without_status(self, http_client, api):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        api.add_handler("GET", "/offers", refuse)

        with pytest.raises(HttpError) as exc_info:
            await http_client.get("offers")

        assert exc_info.value.status_code is None
        assert exc_info.value.details["error_type"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_timeout_is_reported(self, http_client, api):
        def slow(request):
            raise httpx.ReadTimeout("too slow", request=request)

        api.add_handler("GET", "/offers", slow)

        with pytest.raises(HttpError) as exc_info:
            await http_client.get("offers")

        assert exc_info.value.details["error_type"] == "timeout"
