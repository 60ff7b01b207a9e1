"""Tests for the command-line interface."""

import json

from typer.testing import CliRunner

from talentmatch.main import app
from tests.test_utils import berlin_python_candidate, make_test_job

runner = CliRunner()


def write_data_file(tmp_path, applications=None):
    data = {
        "candidates": [berlin_python_candidate().model_dump(mode="json")],
        "jobs": [
            make_test_job(
                "job-high",
                title="Python Developer",
                description="Build Django web services",
                skills=["python", "django"],
                location="Berlin",
            ).model_dump(mode="json"),
            make_test_job("job-closed", skills=["python"], status="closed").model_dump(mode="json"),
        ],
        "applications": applications or [],
    }
    path = tmp_path / "data.json"
    path.write_text(json.dumps(data))
    return path


class TestCLICommands:
    def test_load_missing_file(self, temp_db):
        result = runner.invoke(app, ["load", "--file", "/nonexistent/data.json"])

        assert result.exit_code == 1

    def test_load_and_recommend_json(self, temp_db, tmp_path):
        data_file = write_data_file(tmp_path)

        load_result = runner.invoke(app, ["load", "--file", str(data_file)])
        assert load_result.exit_code == 0

        result = runner.invoke(app, ["recommend", "--candidate", "cand-1", "--json"])

        assert result.exit_code == 0
        output = json.loads(result.stdout)
        assert [r["job_id"] for r in output] == ["job-high"]
        assert output[0]["match_score"] >= 70

    def test_recommend_unknown_candidate(self, temp_db):
        result = runner.invoke(app, ["recommend", "--candidate", "nobody"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_list_without_recommendations(self, temp_db):
        result = runner.invoke(app, ["list", "--candidate", "cand-1"])

        assert result.exit_code == 0
        assert "No recommendations found" in result.stdout

    def test_score_closed_job(self, temp_db, tmp_path):
        runner.invoke(app, ["load", "--file", str(write_data_file(tmp_path))])

        result = runner.invoke(app, ["score", "--candidate", "cand-1", "--job", "job-closed"])

        assert result.exit_code == 1
        assert "no longer accepting applications" in result.stdout

    def test_stats(self, temp_db, tmp_path):
        runner.invoke(app, ["load", "--file", str(write_data_file(tmp_path))])
        runner.invoke(app, ["recommend", "--candidate", "cand-1", "--json"])

        result = runner.invoke(app, ["stats", "--candidate", "cand-1"])

        assert result.exit_code == 0
        assert "Total" in result.stdout
