import datetime
import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from src.catalog import Category
from src.exceptions import InvalidPayloadError
from src.models import ArtworkResponse, Rating

REVIEW_STORAGE_KEY = "pa-art-review-v3"
FEEDBACK_STORAGE_KEY = "pa-art-feedback-v3"


def _utc_now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class ResponseStore:
    """A thread-safe, file-backed store of one reviewer's in-progress responses.

    State is saved under two fixed keys so a restarted session resumes where
    it left off: ``pa-art-review-v3`` holds the responses and reviewer name,
    ``pa-art-feedback-v3`` holds the free-text feedback draft. This is a
    convenience cache, not a system of record.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Create a store.

        Args:
            path: JSON file to persist to. :pydata:`None` keeps state in memory only.
        """
        self._responses: Dict[str, ArtworkResponse] = {}
        self._reviewer_name: str = ""
        self._feedback: str = ""
        self._feedback_updated_at: Optional[str] = None
        self._lock = threading.Lock()
        self._path = Path(path) if path is not None else None
        self._logger = logging.getLogger(__name__)
        self._load()

    # ------------------------------------------------------------------
    # Reviewer identity & feedback draft
    # ------------------------------------------------------------------

    @property
    def reviewer_name(self) -> str:
        with self._lock:
            return self._reviewer_name

    def set_reviewer_name(self, name: str) -> None:
        with self._lock:
            self._reviewer_name = name.strip()
            self._save_locked()

    @property
    def feedback(self) -> str:
        with self._lock:
            return self._feedback

    @property
    def feedback_updated_at(self) -> Optional[str]:
        """ISO stamp of the last feedback edit, or None."""
        with self._lock:
            return self._feedback_updated_at

    def set_feedback(self, text: str) -> None:
        with self._lock:
            self._feedback = text
            self._feedback_updated_at = _utc_now_iso()
            self._save_locked()

    # ------------------------------------------------------------------
    # Response mutations
    # ------------------------------------------------------------------

    def _modify(
        self, artwork_id: str, modifier: Callable[[ArtworkResponse], None]
    ) -> ArtworkResponse:
        """Atomically create-or-update the response for *artwork_id*."""
        with self._lock:
            response = self._responses.get(artwork_id)
            if response is None:
                response = ArtworkResponse(artwork_id=artwork_id)
                self._responses[artwork_id] = response
            modifier(response)
            response.timestamp = _utc_now_iso()
            self._save_locked()
            return response

    def set_rating(
        self, artwork_id: str, rating: Rating, comment: Optional[str] = None
    ) -> ArtworkResponse:
        """Rate *artwork_id*; an omitted *comment* keeps the existing one."""
        rating = Rating(rating)

        def _apply(response: ArtworkResponse) -> None:
            response.rating = rating
            if comment:
                response.comment = comment

        return self._modify(artwork_id, _apply)

    def set_comment(self, artwork_id: str, comment: str) -> ArtworkResponse:
        def _apply(response: ArtworkResponse) -> None:
            response.comment = comment

        return self._modify(artwork_id, _apply)

    def get(self, artwork_id: str) -> Optional[ArtworkResponse]:
        with self._lock:
            return self._responses.get(artwork_id)

    def snapshot(self) -> Dict[str, ArtworkResponse]:
        """Return a copy of all responses, safe to hand to the assembler."""
        with self._lock:
            return {
                k: ArtworkResponse(r.artwork_id, r.rating, r.comment, r.timestamp)
                for k, r in self._responses.items()
            }

    def clear(self) -> None:
        """Drop every response and the feedback draft (the only way to delete)."""
        with self._lock:
            self._responses.clear()
            self._feedback = ""
            self._feedback_updated_at = None
            self._save_locked()

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def rated_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._responses.values() if r.rating is not Rating.UNRATED)

    def progress(self, category: Category) -> Tuple[int, int]:
        """Return ``(rated, total)`` for *category*."""
        with self._lock:
            rated = sum(
                1
                for artwork_id in category.artwork_ids
                if artwork_id in self._responses
                and self._responses[artwork_id].rating is not Rating.UNRATED
            )
        return rated, category.image_count

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            self._logger.warning("Ignoring unreadable response store %s: %s", self._path, exc)
            return
        if not isinstance(data, dict):
            self._logger.warning("Ignoring response store %s: not a JSON object", self._path)
            return

        review = self._section(data, REVIEW_STORAGE_KEY)
        responses = review.get("responses") or {}
        if not isinstance(responses, dict):
            self._logger.warning("Ignoring stored responses in %s: not an object", self._path)
            responses = {}
        for artwork_id, entry in responses.items():
            try:
                self._responses[artwork_id] = ArtworkResponse.from_dict(artwork_id, entry)
            except InvalidPayloadError as exc:
                self._logger.warning("Skipping stored response %s: %s", artwork_id, exc)
        self._reviewer_name = _as_str(review.get("reviewerName"))

        feedback = self._section(data, FEEDBACK_STORAGE_KEY)
        self._feedback = _as_str(feedback.get("feedback"))
        self._feedback_updated_at = _as_str(feedback.get("lastUpdated")) or None

    def _section(self, data: Dict[str, Any], key: str) -> Dict[str, Any]:
        section = data.get(key) or {}
        if not isinstance(section, dict):
            self._logger.warning("Ignoring stored %s in %s: not an object", key, self._path)
            return {}
        return section

    def _save_locked(self) -> None:
        if self._path is None:
            return
        now = _utc_now_iso()
        data = {
            REVIEW_STORAGE_KEY: {
                "responses": {k: r.to_dict() for k, r in self._responses.items()},
                "reviewerName": self._reviewer_name,
                "lastUpdated": now,
            },
            FEEDBACK_STORAGE_KEY: {
                "feedback": self._feedback,
                "reviewerName": self._reviewer_name,
                "lastUpdated": self._feedback_updated_at or now,
            },
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            self._logger.error("Failed to save responses to %s: %s", self._path, exc)
