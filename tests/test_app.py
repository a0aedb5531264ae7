# tests/test_app.py
from unittest.mock import MagicMock, patch

import pytest

import src.app as app
from src.app import CORS_PREFLIGHT_HEADERS, GENERIC_FAILURE, SUBMIT_ROUTES, create_app
from src.exceptions import InvalidPayloadError, MissingFieldError
from src.models import ProcessResult
from src.pipeline.processor import SubmissionPipeline

BODY = {"reviewerName": "Jane Doe", "responses": {"impr-3": {"rating": "yes"}}}


@pytest.fixture()
def pipeline():
    mock = MagicMock(spec=SubmissionPipeline)
    mock.process_submission.return_value = ProcessResult(
        success=True,
        message="Review submitted successfully",
        uploaded_count=1,
        image_urls=["https://img/a.png"],
    )
    return mock


@pytest.fixture()
def client(pipeline):
    flask_app = create_app(pipeline=pipeline)
    flask_app.testing = True
    return flask_app.test_client()


# --- Submission route --- #


@pytest.mark.parametrize("path", SUBMIT_ROUTES)
def test_preflight_returns_cors_headers(client, pipeline, path):
    resp = client.open(path, method="OPTIONS")

    assert resp.status_code == 200
    assert resp.data == b""
    for header, value in CORS_PREFLIGHT_HEADERS.items():
        assert resp.headers[header] == value
    pipeline.process_submission.assert_not_called()


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_other_methods_rejected(client, pipeline, method):
    resp = client.open("/submit-review", method=method)

    assert resp.status_code == 405
    assert resp.get_json() == {"error": "Method not allowed"}
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    pipeline.process_submission.assert_not_called()


@pytest.mark.parametrize("path", SUBMIT_ROUTES)
def test_successful_submission(client, pipeline, path):
    resp = client.post(path, json=BODY)

    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True,
        "message": "Review submitted successfully",
        "uploadedImages": 1,
        "imageUrls": ["https://img/a.png"],
    }
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    pipeline.process_submission.assert_called_once_with(BODY)


def test_body_without_content_type_is_still_parsed(client, pipeline):
    resp = client.post("/submit-review", data='{"reviewerName": "Jane", "responses": {}}')

    assert resp.status_code == 200
    pipeline.process_submission.assert_called_once_with({"reviewerName": "Jane", "responses": {}})


def test_malformed_json_is_400(client, pipeline):
    resp = client.post(
        "/submit-review", data="{not json", headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid request body"
    pipeline.process_submission.assert_not_called()


def test_missing_fields_is_400(client, pipeline):
    pipeline.process_submission.side_effect = MissingFieldError("Missing required fields")

    resp = client.post("/submit-review", json={"responses": {}})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Missing required fields"


def test_invalid_shape_is_400(client, pipeline):
    pipeline.process_submission.side_effect = InvalidPayloadError("Invalid rating for 'impr-3'")

    resp = client.post("/submit-review", json=BODY)

    assert resp.status_code == 400
    assert resp.get_json() == {
        "error": "Invalid submission",
        "detail": "Invalid rating for 'impr-3'",
    }


@patch("src.app.logger")
def test_unexpected_error_is_500_with_generic_message(mock_logger, client, pipeline):
    pipeline.process_submission.side_effect = RuntimeError("SECRET stack detail")

    resp = client.post("/submit-review", json=BODY)

    assert resp.status_code == 500
    assert resp.get_json() == {"error": GENERIC_FAILURE}
    assert "SECRET" not in resp.get_data(as_text=True)
    mock_logger.exception.assert_called_once_with("Submission error")


# --- Health & lifecycle --- #


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "healthy", "service": "art-review-submissions"}


@patch("src.app.executor")
@patch("src.app.logger")
def test_shutdown_executor(mock_logger, mock_executor):
    """Test that shutdown_executor calls executor.shutdown and logs messages."""
    app.shutdown_executor()

    mock_executor.shutdown.assert_called_once_with(wait=True)
    mock_logger.info.assert_any_call("Shutting down thread pool executor...")
    mock_logger.info.assert_any_call("Thread pool executor shut down gracefully.")


def test_module_app_is_built_from_environment():
    assert isinstance(app.app.config["SUBMISSION_PIPELINE"], SubmissionPipeline)
