"""
Tests for the HTTP routes — upload, analyze, health and config.
"""

import os
import sys
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient

from main import app

SAMPLE_CSV = os.path.join(os.path.dirname(__file__), "..", "sample_data", "student_spending.csv")


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


@pytest.fixture(scope="module")
def sample_data(client):
    resp = client.get("/api/upload/sample")
    assert resp.status_code == 200
    return resp.json()["data"]


class TestMeta:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_config(self, client):
        body = client.get("/api/config").json()
        assert body["genders"] == ["Male", "Female", "Non-binary"]
        assert body["income_brackets"] == ["0-75", "75-150", "150+"]
        assert len(body["categories"]) == 9


class TestUpload:
    def test_sample(self, client):
        body = client.get("/api/upload/sample").json()
        assert body["record_count"] == 40
        assert body["filename"] == "student_spending.csv"
        assert "discretionary_spending" in body["data"][0]

    def test_upload_csv(self, client):
        with open(SAMPLE_CSV, "rb") as f:
            resp = client.post(
                "/api/upload/file",
                files={"file": ("student_spending.csv", f, "text/csv")},
            )
        assert resp.status_code == 200
        assert resp.json()["record_count"] == 40

    def test_upload_unsupported_type(self, client):
        resp = client.post(
            "/api/upload/file",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert resp.status_code == 400

    def test_upload_empty_table_rejected(self, client):
        resp = client.post(
            "/api/upload/file",
            files={"file": ("empty.csv", b"gender,major\n", "text/csv")},
        )
        assert resp.status_code == 400


class TestAnalyze:
    def test_groups(self, client, sample_data):
        resp = client.post("/api/analyze/groups/gender", json={"data": sample_data})
        assert resp.status_code == 200
        body = resp.json()
        assert [g["group"] for g in body["groups"]] == ["Male", "Female", "Non-binary"]

    def test_groups_unknown_dimension(self, client, sample_data):
        resp = client.post("/api/analyze/groups/campus", json={"data": sample_data})
        assert resp.status_code == 404

    def test_rank_unknown_dimension(self, client, sample_data):
        resp = client.post("/api/analyze/rank/campus/North", json={"data": sample_data})
        assert resp.status_code == 404

    def test_groups_single_category(self, client, sample_data):
        body = client.post("/api/analyze/groups/major", json={
            "data": sample_data, "category": "Entertainment", "normalize": "false",
        }).json()
        assert body["category"] == "entertainment"
        assert body["normalize"] is False
        assert all(g["diff_from_average_pct"] is not None for g in body["groups"])

    def test_groups_normalized(self, client, sample_data):
        body = client.post("/api/analyze/groups/major", json={
            "data": sample_data, "category": "miscellaneous", "normalize": True,
        }).json()
        assert body["normalize"] is True
        assert all(0 <= g["value"] <= 100 for g in body["groups"])

    def test_groups_bad_category(self, client, sample_data):
        resp = client.post(
            "/api/analyze/groups/gender", json={"data": sample_data, "category": "housing"},
        )
        assert resp.status_code == 400

    def test_rank_absent_group(self, client, sample_data):
        resp = client.post(
            "/api/analyze/rank/major/Biology",
            json={"data": sample_data, "filters": {"gender": "Nobody"}},
        )
        assert resp.status_code == 404

    def test_rank(self, client, sample_data):
        body = client.post(
            "/api/analyze/rank/major/Biology", json={"data": sample_data},
        ).json()
        assert body["total"] == 5
        assert 1 <= body["rank"] <= 5

    def test_bad_income_bracket(self, client, sample_data):
        resp = client.post(
            "/api/analyze/income",
            json={"data": sample_data, "filters": {"income_bracket": "1000+"}},
        )
        assert resp.status_code == 400

    def test_missing_data(self, client):
        resp = client.post("/api/analyze/income", json={})
        assert resp.status_code == 400

    def test_distribution_with_query(self, client, sample_data):
        body = client.post("/api/analyze/distribution", json={
            "data": sample_data,
            "query": {"entertainment": "50", "personal-care": "20", "miscellaneous": "10"},
        }).json()
        assert body["status"] == "ok"
        assert body["user"]["total"] == pytest.approx(80)

    def test_radar_without_average(self, client, sample_data):
        body = client.post("/api/analyze/radar", json={
            "data": sample_data, "user": {"entertainment": 40}, "show_average": False,
        }).json()
        assert [s["name"] for s in body["series"]] == ["student"]

    @pytest.mark.parametrize("raw,expected", [
        ("false", ["student"]), ("0", ["student"]), ("true", ["student", "average"]),
    ])
    def test_radar_show_average_strings(self, client, sample_data, raw, expected):
        body = client.post("/api/analyze/radar", json={
            "data": sample_data, "user": {"entertainment": 40}, "show_average": raw,
        }).json()
        assert [s["name"] for s in body["series"]] == expected

    def test_summary(self, client, sample_data):
        body = client.post("/api/analyze/summary", json={
            "data": sample_data, "user": {"entertainment": 500},
        }).json()
        assert body["biggest_difference"]["category"] == "entertainment"
        assert "Entertainment" in body["message"]
