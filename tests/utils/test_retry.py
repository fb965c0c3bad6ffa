# ABOUTME: Tests for the transport retry decorator built on tenacity
# ABOUTME: Validates which errors are retried, attempt limits and re-raising

import httpx
import pytest

from lorekeeper.utils.retry import TRANSIENT_ERRORS, transport_retry


class TestTransientErrors:
    """Test which errors count as transient."""

    def test_transport_errors_are_transient(self):
        assert issubclass(httpx.ConnectError, TRANSIENT_ERRORS)
        assert issubclass(httpx.ReadTimeout, TRANSIENT_ERRORS)

    def test_status_errors_are_not_transient(self):
        assert not issubclass(httpx.HTTPStatusError, TRANSIENT_ERRORS)


class TestTransportRetry:
    """Test the retry decorator behaviour."""

    @pytest.mark.asyncio
    async def test_successful_function(self):
        call_count = 0

        @transport_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            return "ok"

        assert await fetch() == "ok"
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        call_count = 0

        @transport_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise httpx.ConnectError("Connection reset")
            return "ok"

        assert await fetch() == "ok"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_reraises_after_max_attempts(self):
        call_count = 0

        @transport_retry(max_attempts=2, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            raise httpx.ReadTimeout("Timed out")

        with pytest.raises(httpx.ReadTimeout):
            await fetch()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_status_errors_are_not_retried(self):
        call_count = 0
        request = httpx.Request("GET", "https://baldursgate.fandom.com/api.php")
        response = httpx.Response(404, request=request)

        @transport_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def fetch():
            nonlocal call_count
            call_count += 1
            raise httpx.HTTPStatusError("Not found", request=request, response=response)

        with pytest.raises(httpx.HTTPStatusError):
            await fetch()
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_arguments_are_forwarded(self):
        @transport_retry(max_attempts=1)
        async def join(*parts, sep=" "):
            return sep.join(parts)

        assert await join("Carsomyr", "+5", sep="_") == "Carsomyr_+5"
