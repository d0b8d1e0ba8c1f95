"""
Tests for the API key server.
Run from project root: python -m pytest tests/ -v
"""
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from monster_animator.config import AppConfig
from monster_animator.server import MISSING_BUILD_MESSAGE, MISSING_KEY_ERROR, create_app, run_server


class TestGetKeyEndpoint(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.build_dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _client(self, key):
        app = create_app(AppConfig(gemini_api_key=key, build_dir=self.build_dir))
        return app.test_client()

    def test_returns_key_when_configured(self):
        resp = self._client("secret-key").get("/api/get-key")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {"apiKey": "secret-key"})

    def test_returns_500_when_key_missing(self):
        resp = self._client(None).get("/api/get-key")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.get_json(), {"error": MISSING_KEY_ERROR})

    def test_api_route_wins_over_static_file(self):
        api_dir = Path(self.build_dir) / "api"
        api_dir.mkdir()
        (api_dir / "get-key").write_text("static", encoding="utf-8")
        resp = self._client("secret-key").get("/api/get-key")
        self.assertEqual(resp.get_json(), {"apiKey": "secret-key"})


class TestServerLogging(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.build_dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def test_startup_logs_loaded_key(self):
        with self.assertLogs("monster_animator.server", level="INFO") as logs:
            create_app(AppConfig(gemini_api_key="k", build_dir=self.build_dir))
        self.assertIn("INFO:monster_animator.server:Successfully loaded GEMINI_API_KEY", logs.output[0])

    def test_startup_logs_missing_key_as_error(self):
        with self.assertLogs("monster_animator.server", level="INFO") as logs:
            app = create_app(AppConfig(gemini_api_key=None, build_dir=self.build_dir))
        self.assertIsNotNone(app)
        self.assertTrue(any(line.startswith("ERROR:") and "GEMINI_API_KEY" in line for line in logs.output))

    def test_every_key_request_is_logged(self):
        client = create_app(AppConfig(gemini_api_key="k", build_dir=self.build_dir)).test_client()
        with self.assertLogs("monster_animator.server", level="INFO") as logs:
            client.get("/api/get-key")
            client.get("/api/get-key")
        requests_logged = [line for line in logs.output if "Received a request for the API key" in line]
        self.assertEqual(len(requests_logged), 2)
        self.assertFalse(any(line.startswith("ERROR:") for line in logs.output))

    def test_serving_missing_key_logs_error(self):
        client = create_app(AppConfig(gemini_api_key=None, build_dir=self.build_dir)).test_client()
        with self.assertLogs("monster_animator.server", level="INFO") as logs:
            client.get("/api/get-key")
        self.assertIn(f"ERROR:monster_animator.server:Could not serve API key: {MISSING_KEY_ERROR}", logs.output)


class TestRunServer(unittest.TestCase):
    @mock.patch("monster_animator.server.create_app")
    def test_falls_back_to_configured_port(self, create_app_mock):
        config = AppConfig(gemini_api_key="k", port=8123)
        run_server(config)
        create_app_mock.assert_called_once_with(config)
        create_app_mock.return_value.run.assert_called_once_with(host="0.0.0.0", port=8123, debug=False)

    @mock.patch("monster_animator.server.create_app")
    def test_explicit_port_wins(self, create_app_mock):
        run_server(AppConfig(gemini_api_key="k", port=8123), port=9000)
        create_app_mock.return_value.run.assert_called_once_with(host="0.0.0.0", port=9000, debug=False)


class TestFrontendRoutes(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.build_dir = Path(self._tmp.name)
        self.client = create_app(AppConfig(gemini_api_key="k", build_dir=str(self.build_dir))).test_client()

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_build_returns_404(self):
        resp = self.client.get("/some/page")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.get_data(as_text=True), MISSING_BUILD_MESSAGE)

    def test_serves_static_file(self):
        (self.build_dir / "app.js").write_text("console.log('hi');", encoding="utf-8")
        (self.build_dir / "index.html").write_text("<html>index</html>", encoding="utf-8")
        resp = self.client.get("/app.js")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("console.log", resp.get_data(as_text=True))
        resp.close()

    def test_unknown_path_falls_back_to_index(self):
        (self.build_dir / "index.html").write_text("<html>index</html>", encoding="utf-8")
        for path in ("/", "/animate/123"):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200)
            self.assertIn("index", resp.get_data(as_text=True))
            resp.close()


if __name__ == "__main__":
    unittest.main()
