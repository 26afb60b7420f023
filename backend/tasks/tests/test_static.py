from unittest import mock

from django.test import SimpleTestCase, override_settings

from tasks.views import content_type_for

from .utils import TempRepositoryMixin


class StaticAssetTests(TempRepositoryMixin, SimpleTestCase):
    def test_root_serves_index(self):
        root = self.client.get("/")
        index = self.client.get("/index.html")
        self.assertEqual(root.status_code, 200)
        self.assertEqual(root["Content-Type"], "text/html; charset=utf-8")
        self.assertEqual(root.content, index.content)
        self.assertIn(b"<title>TaskMaster</title>", root.content)

    def test_content_types_follow_extension(self):
        self.assertEqual(self.client.get("/style.css")["Content-Type"], "text/css; charset=utf-8")
        self.assertEqual(self.client.get("/script.js")["Content-Type"],
                         "application/javascript; charset=utf-8")
        self.assertEqual(content_type_for("logo.png"), "application/octet-stream")

    def test_assets_carry_cors_headers(self):
        res = self.client.get("/script.js")
        self.assertEqual(res["Access-Control-Allow-Origin"], "*")

    def test_missing_asset_is_plain_text_404(self):
        with override_settings(TASKMASTER_WEB_ROOT=self.make_tmpdir()):
            res = self.client.get("/style.css")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.content, b"404 Not Found: style.css")
        self.assertTrue(res["Content-Type"].startswith("text/plain"))

    def test_favicon_is_no_content(self):
        res = self.client.get("/favicon.ico")
        self.assertEqual(res.status_code, 204)
        self.assertEqual(res.content, b"")

    def test_unknown_path_is_plain_text_404(self):
        res = self.client.get("/no/such/page")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.content, b"404 Not Found: /no/such/page")

    def test_error_in_plain_view_is_json_500(self):
        with mock.patch("tasks.views.content_type_for", side_effect=RuntimeError("boom")):
            with self.assertLogs("tasks.middleware", "ERROR"):
                res = self.client.get("/style.css")
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"error": "Server error"})
        self.assertEqual(res["Access-Control-Allow-Origin"], "*")
