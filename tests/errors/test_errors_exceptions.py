import unittest

from dbxsync.errors.exceptions import (
    ApiError,
    AssemblyError,
    AuthError,
    DbxSyncError,
    DecodeError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    TransportError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DbxSyncError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_transport_errors_are_retryable(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=429))
        self.assertIsInstance(err, TransportError)
        self.assertTrue(err.retryable)

    def test_decode_error_is_not_transport_error(self) -> None:
        self.assertNotIsInstance(DecodeError("bad"), TransportError)

    def test_assembly_error_names_key(self) -> None:
        cause = ApiError("boom")
        err = AssemblyError("Jane/docs/a.txt", "Failed to assemble item", cause=cause)
        self.assertEqual(err.key, "Jane/docs/a.txt")
        self.assertEqual(err.details["key"], "Jane/docs/a.txt")
        self.assertIn("Jane/docs/a.txt", str(err))
        self.assertIs(err.cause, cause)

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, InvalidArgumentError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

        err = map_http_error(HttpErrorInfo(status_code=403, message="denied"))
        self.assertIsInstance(err, PermissionError)

    def test_map_http_error_409_lookup_vs_endpoint(self) -> None:
        err = map_http_error(
            HttpErrorInfo(
                status_code=409,
                reason="ListFolderError('path', LookupError('not_found', None))",
            )
        )
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=409, reason="too_many_files"))
        self.assertIsInstance(err, ApiError)
        self.assertNotIsInstance(err, NotFoundError)

    def test_map_http_error_5xx_is_api_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(err.details["status_code"], 503)

    def test_map_http_error_other_is_api_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418, message="teapot"))
        self.assertIsInstance(err, ApiError)

    def test_rate_limit_backoff(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=429, details={"backoff": 5}))
        self.assertIsInstance(err, RateLimitError)
        self.assertEqual(err.backoff, 5.0)

        err = map_http_error(HttpErrorInfo(status_code=429))
        self.assertIsNone(err.backoff)


if __name__ == "__main__":
    unittest.main()
