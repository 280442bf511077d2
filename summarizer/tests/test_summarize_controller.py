"""
/**
 * @file summarizer/tests/test_summarize_controller.py
 * @description /api/summarize 端到端测试（TestClient + mock HTTP session）。
 */
"""

import unittest
from unittest.mock import Mock, patch

import requests
from fastapi.testclient import TestClient

from summarizer.main import app
from summarizer.services.job_poller_service import JobPoller
from summarizer.services.language_client_service import LanguageClient
from summarizer.services.poll_policy_service import PollPolicy
from summarizer.tests.helpers import make_settings, status_response, submit_response, without_language_env


class TestSummarizeController(unittest.TestCase):
    def setUp(self):
        env = without_language_env()
        env.start()
        self.addCleanup(env.stop)

        self.session = Mock()
        self.session.post.return_value = submit_response(
            location="https://example-language.cognitiveservices.azure.com/language/analyze-text/jobs/abc123?api-version=x"
        )
        self.sleeps = []
        self.max_attempts = 30

        def build_poller():
            settings = make_settings()
            return JobPoller(
                client=LanguageClient(settings=settings, session=self.session),
                policy=PollPolicy(max_attempts=self.max_attempts),
                settings=settings,
                sleep=self.sleeps.append,
            )

        patcher = patch("summarizer.controllers.summarize_controller._build_poller", side_effect=build_poller)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(app)

    def test_succeeds_on_first_poll(self):
        self.session.get.return_value = status_response(
            "succeeded",
            tasks={"items": [{"kind": "ExtractiveSummarizationLROResults", "results": {"documents": []}}]},
        )

        r = self.client.post("/api/summarize", json={"text": "Hello world. This is a test."})

        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["status"], "succeeded")
        self.assertIn("tasks", body["data"])
        self.assertEqual(self.session.get.call_count, 1)
        self.assertTrue(self.session.get.call_args[0][0].endswith("/jobs/abc123"))

    def test_running_five_times_then_succeeded(self):
        self.session.get.side_effect = [status_response("running")] * 5 + [status_response("succeeded")]

        r = self.client.post("/api/summarize", json={"text": "Hello world. This is a test."})

        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.session.get.call_count, 6)
        self.assertEqual(len(self.sleeps), 5)

    def test_always_running_times_out(self):
        self.max_attempts = 3
        self.session.get.return_value = status_response("running")

        r = self.client.post("/api/summarize", json={"text": "Hello world. This is a test."})

        self.assertEqual(r.status_code, 500)
        body = r.json()
        self.assertEqual(body["error"], "Failed to summarize text")
        self.assertIn("timeout", body["details"])
        self.assertEqual(self.session.get.call_count, 3)

    def test_missing_text_never_submits(self):
        for payload in ({}, {"text": ""}, {"text": "   "}, {"text": None}):
            r = self.client.post("/api/summarize", json=payload)
            self.assertEqual(r.status_code, 400)
            self.assertEqual(r.json(), {"error": "Text is required"})
        self.session.post.assert_not_called()

    def test_invalid_body(self):
        r = self.client.post("/api/summarize", content="not json", headers={"Content-Type": "application/json"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "Invalid request body")

        r = self.client.post("/api/summarize", json={"text": 42})
        self.assertEqual(r.status_code, 400)
        self.session.post.assert_not_called()

    def test_job_failed(self):
        self.session.get.return_value = status_response("failed", errors=[{"code": "InvalidRequest"}])

        r = self.client.post("/api/summarize", json={"text": "Hello."})

        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json()["details"], [{"code": "InvalidRequest"}])

    def test_submission_rejected(self):
        resp = Mock(status_code=401, text="denied")
        resp.json.return_value = {"error": {"code": "401"}}
        self.session.post.return_value = resp

        r = self.client.post("/api/summarize", json={"text": "Hello."})

        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Failed to summarize text", "details": {"error": {"code": "401"}}})
        self.session.get.assert_not_called()

    def test_transport_error_aborts(self):
        self.session.get.side_effect = requests.ConnectionError("connection reset")

        r = self.client.post("/api/summarize", json={"text": "Hello."})

        self.assertEqual(r.status_code, 500)
        self.assertIn("connection reset", r.json()["details"])
        self.assertEqual(self.session.get.call_count, 1)

    def test_unexpected_error_keeps_json_body(self):
        self.session.get.side_effect = ValueError("Invalid timeout value")

        r = self.client.post("/api/summarize", json={"text": "Hello."})

        self.assertEqual(r.status_code, 500)
        self.assertEqual(r.json(), {"error": "Failed to summarize text", "details": "Invalid timeout value"})


if __name__ == "__main__":
    unittest.main()
