import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

import server
from bodymeasure import config as config_mod
from bodymeasure.analysis import BodyTypeAnalyzer
from bodymeasure.config import ApiConfig, AppConfig
from bodymeasure.errors import ProviderFailure
from bodymeasure.pose.base import PoseProvider

from conftest import keypoint_dicts, make_detection


class FakeProvider(PoseProvider):
	def __init__(self, detections=None, fail=False):
		self.detections = [make_detection()] if detections is None else detections
		self.fail = fail
		self.closed = False

	def name(self) -> str:
		return "fake"

	def infer_rgb(self, rgb):
		if self.fail:
			raise ProviderFailure("model crashed")
		return list(self.detections)

	def close(self) -> None:
		self.closed = True


class FixedAnalyzer(BodyTypeAnalyzer):
	def name(self) -> str:
		return "fixed"

	def describe(self, prompt: str, image_jpeg: bytes) -> str:
		assert image_jpeg[:2] == b"\xff\xd8"
		return "Long-legged."


def _png(h=450, w=200) -> bytes:
	ok, buf = cv2.imencode(".png", np.zeros((h, w, 3), dtype=np.uint8))
	assert ok
	return buf.tobytes()


@pytest.fixture
def app_config(monkeypatch):
	cfg = AppConfig()
	monkeypatch.setattr(config_mod, "_CONFIG_CACHE", cfg)
	return cfg


@pytest.fixture
def provider():
	return FakeProvider()


@pytest.fixture
def client(monkeypatch, app_config, provider):
	monkeypatch.setattr(server, "create_provider", lambda cfg: provider)
	with TestClient(server.app) as c:
		yield c


def _upload(client, path, data=None, **form):
	return client.post(path, files={"image": ("person.png", data or _png(), "image/png")}, data=form)


def test_status_reports_provider_and_defaults(client):
	r = client.get("/api/status")
	assert r.status_code == 200
	body = r.json()
	assert body["provider"] == "fake"
	assert body["default_height_cm"] == 160.0
	assert body["head_height_ratio"] == 1.5


def test_provider_closed_on_shutdown(monkeypatch, app_config, provider):
	monkeypatch.setattr(server, "create_provider", lambda cfg: provider)
	with TestClient(server.app):
		assert not provider.closed
	assert provider.closed


def test_measure_keypoints(client):
	r = client.post(
		"/api/measure",
		json={"height_cm": 170, "detections": [{"keypoints": keypoint_dicts(make_detection())}]},
	)
	assert r.status_code == 200
	body = r.json()
	assert body["detections"] == 1
	res = body["results"][0]
	assert res["measurements"] == {"head": 30, "upperBody": 67, "lowerBody": 74, "hipToKnee": 37, "kneeToAnkle": 37}
	assert res["proportions"]["upper_lower_ratio"] == "67:74"
	assert "error" not in res


def test_measure_uses_default_height(client):
	r = client.post("/api/measure", json={"detections": [{"keypoints": keypoint_dicts(make_detection())}]})
	assert r.json()["height_cm"] == 160.0


def test_measure_reports_degenerate_detection_and_continues(client):
	collapsed = [{"name": k["name"], "x": 1, "y": 1} for k in keypoint_dicts(make_detection())]
	r = client.post(
		"/api/measure",
		json={"height_cm": 170, "detections": [{"keypoints": collapsed}, {"keypoints": keypoint_dicts(make_detection())}]},
	)
	first, second = r.json()["results"]
	assert first["code"] == "DEGENERATE_CALIBRATION"
	assert "measurements" not in first
	assert second["measurements"]["head"] == 30


def test_measure_rejects_nonpositive_height_per_detection(client):
	r = client.post("/api/measure", json={"height_cm": 0, "detections": [{"keypoints": []}]})
	assert r.status_code == 200
	assert r.json()["results"][0]["code"] == "DEGENERATE_CALIBRATION"


def test_measure_rejects_bad_score(client):
	r = client.post("/api/measure", json={"detections": [{"keypoints": [{"name": "nose", "x": 1, "y": 1, "score": 2}]}]})
	assert r.status_code == 422


def test_measure_image(client):
	r = _upload(client, "/api/measure/image", height_cm="170")
	assert r.status_code == 200
	body = r.json()
	assert body["detections"] == 1
	assert body["results"][0]["measurements"]["lowerBody"] == 74
	assert "analysis" not in body["results"][0]


def test_measure_image_with_analyzer(client):
	client.app.state.state.analyzer = FixedAnalyzer()
	r = _upload(client, "/api/measure/image", height_cm="170", analyze="true")
	assert r.json()["results"][0]["analysis"] == "Long-legged."


def test_measure_image_no_person(client, provider):
	provider.detections = []
	r = _upload(client, "/api/measure/image")
	body = r.json()
	assert body["detections"] == 0
	assert body["results"] == []
	assert "No person detected" in body["detail"]


def test_provider_failure_counts_as_no_person(client, provider):
	provider.fail = True
	r = _upload(client, "/api/measure/image")
	assert r.status_code == 200
	assert r.json()["detections"] == 0
	assert r.json()["detail"] == "Pose provider failed; treated as no person detected."


def test_undecodable_image_is_400(client):
	r = _upload(client, "/api/measure/image", data=b"definitely not an image")
	assert r.status_code == 400


def test_oversized_upload_is_413(monkeypatch, provider):
	monkeypatch.setattr(config_mod, "_CONFIG_CACHE", AppConfig(api=ApiConfig(max_upload_bytes=16)))
	monkeypatch.setattr(server, "create_provider", lambda cfg: provider)
	with TestClient(server.app) as c:
		assert _upload(c, "/api/measure/image").status_code == 413


def test_image_routes_need_a_provider(monkeypatch, app_config):
	def unavailable(cfg):
		raise RuntimeError("mediapipe is not installed")

	monkeypatch.setattr(server, "create_provider", unavailable)
	with TestClient(server.app) as c:
		assert c.get("/api/status").json()["provider_error"] == "mediapipe is not installed"
		r = _upload(c, "/api/measure/image")
		assert r.status_code == 503
		# keypoint measurement does not need the provider
		ok = c.post("/api/measure", json={"detections": [{"keypoints": keypoint_dicts(make_detection())}]})
		assert ok.status_code == 200


def test_overlay_returns_jpeg(client):
	r = _upload(client, "/api/overlay")
	assert r.status_code == 200
	assert r.headers["content-type"] == "image/jpeg"
	assert r.content[:2] == b"\xff\xd8"


def test_overlay_without_person_is_404(client, provider):
	provider.detections = []
	assert _upload(client, "/api/overlay").status_code == 404
