"""Submission data model and boundary validation.

The wire format is the JSON object posted by the review front-end::

    {
      "reviewerName": "Jane Doe",
      "reviewerEmail": "jane@example.com",          # optional
      "responses": {"impr-3": {"rating": "yes", "comment": "...", "timestamp": "..."}},
      "additionalFeedback": "...",                  # optional
      "uploadedImages": [{"name": "a.png", "type": "image/png", "data": "data:..."}],
      "submittedAt": "2024-05-01T12:00:00.000Z"
    }

``SubmissionPayload.from_dict`` is the only place that trusts caller-supplied
shape; everything downstream works with the typed records below.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from src.exceptions import InvalidPayloadError, MissingFieldError


class Rating(str, Enum):
    """Closed set of reactions a reviewer can give one artwork."""

    UNRATED = ""
    YES = "yes"
    MAYBE = "maybe"
    NO = "no"

    @classmethod
    def parse(cls, raw: Any) -> "Rating":
        """Return the rating for *raw*; ``None`` and ``""`` mean unrated."""
        if raw is None:
            return cls.UNRATED
        if not isinstance(raw, str):
            raise ValueError(f"Rating must be a string, got {type(raw).__name__}")
        return cls(raw.strip().lower())

    @property
    def emoji(self) -> str:
        return _RATING_EMOJI[self]


_RATING_EMOJI = {
    Rating.UNRATED: "",
    Rating.YES: "👍",
    Rating.MAYBE: "🤔",
    Rating.NO: "👎",
}


@dataclass(slots=True)
class ArtworkResponse:
    """A reviewer's rating and comment for one artwork."""

    artwork_id: str
    rating: Rating = Rating.UNRATED
    comment: str = ""
    timestamp: Optional[str] = None

    @property
    def is_reviewed(self) -> bool:
        """False for an entry with neither a rating nor a comment."""
        return self.rating is not Rating.UNRATED or bool(self.comment.strip())

    @property
    def has_comment(self) -> bool:
        return bool(self.comment.strip())

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"rating": self.rating.value, "comment": self.comment}
        if self.timestamp:
            out["timestamp"] = self.timestamp
        return out

    @classmethod
    def from_dict(cls, artwork_id: str, data: Mapping[str, Any]) -> "ArtworkResponse":
        if not isinstance(data, Mapping):
            raise InvalidPayloadError(f"Response for '{artwork_id}' must be an object")
        try:
            rating = Rating.parse(data.get("rating"))
        except ValueError as exc:
            raise InvalidPayloadError(
                f"Invalid rating for '{artwork_id}': {data.get('rating')!r}"
            ) from exc
        comment = data.get("comment") or ""
        if not isinstance(comment, str):
            raise InvalidPayloadError(f"Comment for '{artwork_id}' must be a string")
        timestamp = data.get("timestamp") or None
        return cls(
            artwork_id=artwork_id,
            rating=rating,
            comment=comment,
            timestamp=str(timestamp) if timestamp is not None else None,
        )


@dataclass(slots=True)
class UploadedImage:
    """A reviewer-supplied reference file, transport-encoded."""

    name: str
    mime_type: str
    data: str  # data: URI or bare base64

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.mime_type, "data": self.data}


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


@dataclass(slots=True)
class SubmissionPayload:
    """Everything one reviewer sends in a single submit."""

    reviewer_name: str
    responses: Dict[str, ArtworkResponse]
    reviewer_email: Optional[str] = None
    additional_feedback: str = ""
    uploaded_images: List[UploadedImage] = field(default_factory=list)
    submitted_at: str = field(default_factory=_now_iso)
    # Decoded request body as received; the JSON backup is rendered from it.
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def reviewed_responses(self) -> Dict[str, ArtworkResponse]:
        return {k: r for k, r in self.responses.items() if r.is_reviewed}

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire representation."""
        out: Dict[str, Any] = {
            "reviewerName": self.reviewer_name,
            "responses": {k: r.to_dict() for k, r in self.responses.items()},
            "additionalFeedback": self.additional_feedback,
            "uploadedImages": [img.to_dict() for img in self.uploaded_images],
            "submittedAt": self.submitted_at,
        }
        if self.reviewer_email:
            out["reviewerEmail"] = self.reviewer_email
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "SubmissionPayload":
        """Validate *data* and build a payload.

        Raises
        ------
        MissingFieldError
            If ``reviewerName`` is empty or ``responses`` is absent.
        InvalidPayloadError
            If any present field has the wrong shape.
        """
        if not isinstance(data, Mapping):
            raise InvalidPayloadError("Submission body must be a JSON object")

        reviewer_name = data.get("reviewerName")
        responses_raw = data.get("responses")
        if (
            not isinstance(reviewer_name, str)
            or not reviewer_name.strip()
            or responses_raw is None
        ):
            raise MissingFieldError("Missing required fields")
        if not isinstance(responses_raw, Mapping):
            raise InvalidPayloadError("'responses' must be an object keyed by artwork id")

        responses = {
            str(artwork_id): ArtworkResponse.from_dict(str(artwork_id), entry)
            for artwork_id, entry in responses_raw.items()
        }

        reviewer_email = data.get("reviewerEmail") or None
        if reviewer_email is not None and not isinstance(reviewer_email, str):
            raise InvalidPayloadError("'reviewerEmail' must be a string")

        feedback = data.get("additionalFeedback") or ""
        if not isinstance(feedback, str):
            raise InvalidPayloadError("'additionalFeedback' must be a string")

        images_raw = data.get("uploadedImages") or []
        if not isinstance(images_raw, list):
            raise InvalidPayloadError("'uploadedImages' must be a list")
        images: List[UploadedImage] = []
        for idx, item in enumerate(images_raw, start=1):
            if not isinstance(item, Mapping) or not isinstance(item.get("data"), str):
                raise InvalidPayloadError(f"Uploaded image #{idx} has no data")
            images.append(
                UploadedImage(
                    name=str(item.get("name") or f"upload-{idx}"),
                    mime_type=str(item.get("type") or "application/octet-stream"),
                    data=item["data"],
                )
            )

        submitted_at = data.get("submittedAt") or _now_iso()

        return cls(
            reviewer_name=reviewer_name.strip(),
            responses=responses,
            reviewer_email=reviewer_email,
            additional_feedback=feedback,
            uploaded_images=images,
            submitted_at=str(submitted_at),
            raw=dict(data),
        )


@dataclass(slots=True)
class UploadOutcome:
    """Result of archiving one uploaded image: a URL or an error message."""

    index: int
    name: str
    url: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.url is not None


@dataclass(slots=True)
class ProcessResult:
    """What the pipeline reports back to the HTTP layer."""

    success: bool
    message: str
    uploaded_count: int = 0
    image_urls: List[str] = field(default_factory=list)
    notified: bool = False

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "uploadedImages": self.uploaded_count,
            "imageUrls": list(self.image_urls),
        }
