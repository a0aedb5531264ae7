import atexit
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from src.config import AppConfig
from src.exceptions import MissingFieldError, SubmissionValidationError
from src.pipeline.processor import SubmissionPipeline

# Load environment variables from .env file
load_dotenv()

# Set up logging
logging_level = os.environ.get("LOG_LEVEL", "INFO")
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging_level
)
logger = logging.getLogger(__name__)

SUBMIT_ROUTES = ("/submit-review", "/.netlify/functions/submit-review")

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

GENERIC_FAILURE = "Failed to process submission"

# Shared pool for image upload fan-out across requests
executor = ThreadPoolExecutor(max_workers=10, thread_name_prefix="upload")


def create_app(pipeline: Optional[SubmissionPipeline] = None) -> Flask:
    """Build the Flask app around *pipeline* (default: configured from env)."""
    if pipeline is None:
        config = AppConfig.from_env()
        config.log_summary()
        pipeline = SubmissionPipeline.from_config(config, executor=executor)

    flask_app = Flask(__name__)
    flask_app.config["SUBMISSION_PIPELINE"] = pipeline

    @flask_app.after_request
    def _allow_any_origin(response):
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response

    def submit_review():
        """Handle the review form submission."""
        if request.method == "OPTIONS":
            return "", 200, CORS_PREFLIGHT_HEADERS
        if request.method != "POST":
            return jsonify({"error": "Method not allowed"}), 405

        body = request.get_json(force=True, silent=True)
        if body is None:
            logger.warning("Rejected submission with unparseable JSON body")
            return jsonify({"error": "Invalid request body", "detail": "Body must be JSON"}), 400

        try:
            result = pipeline.process_submission(body)
        except SubmissionValidationError as exc:
            logger.warning("Rejected submission: %s", exc)
            error = "Missing required fields" if isinstance(exc, MissingFieldError) else "Invalid submission"
            return jsonify({"error": error, "detail": str(exc)}), 400
        except Exception:
            logger.exception("Submission error")
            return jsonify({"error": GENERIC_FAILURE}), 500

        return jsonify(result.to_response()), 200

    for idx, path in enumerate(SUBMIT_ROUTES):
        flask_app.add_url_rule(
            path,
            endpoint=f"submit_review_{idx}",
            view_func=submit_review,
            methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            provide_automatic_options=False,
        )

    @flask_app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint"""
        return jsonify({"status": "healthy", "service": "art-review-submissions"})

    return flask_app


def shutdown_executor():
    """Gracefully shut down the upload thread pool executor."""
    logger.info("Shutting down thread pool executor...")
    executor.shutdown(wait=True)
    logger.info("Thread pool executor shut down gracefully.")


# Register the shutdown function to be called on exit
atexit.register(shutdown_executor)

app = create_app()
