import errno
import unittest

import aiohttp

from fakes import FakeVersionSource, RecordingSleep, version

from modwatch.exceptions import (
    APIError,
    APINotFoundError,
    APIRateLimitError,
    APIServerError,
    FetchError,
    PermanentFetchError,
    TransientFetchError,
)
from modwatch.services.fetcher import (
    PermanentFailure,
    RetryableFailure,
    RetryingFetcher,
    Success,
    is_retryable,
)


class TestIsRetryable(unittest.TestCase):
    def test_retryable_statuses(self):
        self.assertTrue(is_retryable(APIRateLimitError("busy", status=429)))
        self.assertTrue(is_retryable(APIServerError("bad gateway", status=502)))
        self.assertTrue(is_retryable(APIServerError("unavailable", status=503)))

    def test_permanent_statuses(self):
        self.assertFalse(is_retryable(APINotFoundError("missing", status=404)))
        self.assertFalse(is_retryable(APIServerError("boom", status=500)))
        self.assertFalse(is_retryable(APIError("bad json", status=200)))
        self.assertFalse(is_retryable(ValueError("nope")))

    def test_connection_reset(self):
        self.assertTrue(is_retryable(ConnectionResetError()))
        self.assertTrue(is_retryable(aiohttp.ServerDisconnectedError()))
        self.assertTrue(is_retryable(aiohttp.ClientOSError(errno.ECONNRESET, "reset")))
        self.assertFalse(is_retryable(aiohttp.ClientOSError(errno.ECONNREFUSED, "refused")))


class TestRetryingFetcher(unittest.IsolatedAsyncioTestCase):
    async def test_success_on_third_attempt(self):
        versions = [version("1.0.1")]
        source = FakeVersionSource(
            {
                "a": [
                    APIServerError("bad gateway", status=502),
                    APIRateLimitError("slow down", status=429),
                    versions,
                ]
            }
        )
        sleep = RecordingSleep()
        fetcher = RetryingFetcher(source, max_attempts=3, base_delay=1.0, sleep=sleep)

        result = await fetcher.fetch_versions("a")

        self.assertEqual(result, versions)
        self.assertEqual(source.calls, ["a", "a", "a"])
        self.assertEqual(sleep.delays, [1.0, 2.0])

    async def test_permanent_error_is_not_retried(self):
        source = FakeVersionSource({"a": [APINotFoundError("missing", status=404)]})
        sleep = RecordingSleep()
        fetcher = RetryingFetcher(source, sleep=sleep)

        with self.assertRaises(PermanentFetchError) as ctx:
            await fetcher.fetch_versions("a")

        self.assertEqual(source.calls, ["a"])
        self.assertEqual(sleep.delays, [])
        self.assertIsInstance(ctx.exception.__cause__, APINotFoundError)
        self.assertEqual(ctx.exception.context["status_code"], 404)

    async def test_exhausted_retries(self):
        source = FakeVersionSource({"a": [APIServerError("unavailable", status=503)]})
        sleep = RecordingSleep()
        fetcher = RetryingFetcher(source, max_attempts=3, base_delay=0.5, sleep=sleep)

        with self.assertRaises(TransientFetchError) as ctx:
            await fetcher.fetch_versions("a")

        self.assertIsInstance(ctx.exception, FetchError)
        self.assertEqual(ctx.exception.attempts, 3)
        self.assertEqual(len(source.calls), 3)
        self.assertEqual(sleep.delays, [0.5, 1.0])

    async def test_connection_reset_is_retried(self):
        source = FakeVersionSource({"a": [ConnectionResetError(), [version("2.0.0")]]})
        sleep = RecordingSleep()
        fetcher = RetryingFetcher(source, sleep=sleep)

        result = await fetcher.fetch_versions("a")

        self.assertEqual([v.version_number for v in result], ["2.0.0"])
        self.assertEqual(sleep.delays, [1.0])

    async def test_none_response_is_empty(self):
        source = FakeVersionSource({"a": [None]})
        fetcher = RetryingFetcher(source, sleep=RecordingSleep())
        self.assertEqual(await fetcher.fetch_versions("a"), [])

    async def test_attempt_outcomes(self):
        source = FakeVersionSource(
            {
                "ok": [[version("1.0.0")]],
                "busy": [APIRateLimitError("busy", status=429)],
                "gone": [APINotFoundError("gone", status=404)],
            }
        )
        fetcher = RetryingFetcher(source, max_attempts=2, base_delay=1.5)

        self.assertIsInstance(await fetcher.attempt("ok", 1), Success)

        outcome = await fetcher.attempt("busy", 1)
        self.assertIsInstance(outcome, RetryableFailure)
        self.assertEqual(outcome.wait, 1.5)
        self.assertEqual(outcome.next_attempt, 2)

        outcome = await fetcher.attempt("busy", 2)
        self.assertIsInstance(outcome, PermanentFailure)
        self.assertTrue(outcome.exhausted)

        outcome = await fetcher.attempt("gone", 1)
        self.assertIsInstance(outcome, PermanentFailure)
        self.assertFalse(outcome.exhausted)


if __name__ == "__main__":
    unittest.main()
