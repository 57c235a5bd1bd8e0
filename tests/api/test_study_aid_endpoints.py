"""
Test suite for the study-aid endpoints.

Covers response shapes and the error body mapping of the flashcard, MCQ,
mind map and summarize routes.

System role: HTTP contract verification for study-aid generation
"""

import json

import pytest

from notchy.api.deps import get_study_aid_service
from notchy.application.services import StudyAidService
from notchy.core.exceptions import (
    EmbeddingError,
    GenerationFailedError,
    InvalidRequestError,
    PipelineTimeoutError,
    VectorStoreError,
)
from notchy.core.generation import GenerationClient, StudyAidGenerator
from notchy.core.rag_query import ContextAssembler

TOPICS = json.dumps({"topics": ["Limits", "Derivatives"]})


class RaisingStudyAidService:
    """Service stand-in that raises a configured exception from every call."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    async def generate_flashcards(self, file_keys):
        raise self.error

    async def generate_mcq(self, file_keys):
        raise self.error

    async def generate_mindmap(self, file_keys):
        raise self.error

    async def summarize(self, text):
        raise self.error


@pytest.fixture
def use_model(api_app, rag_pipeline, make_chat_model):
    """Install a study-aid service whose model returns the given responses."""

    def _install(*responses: str):
        model = make_chat_model(*responses)
        client = GenerationClient(model)
        service = StudyAidService(
            pipeline=rag_pipeline,
            generator=StudyAidGenerator(client, ContextAssembler()),
            client=client,
            timeout_seconds=10,
        )
        api_app.dependency_overrides[get_study_aid_service] = lambda: service
        return model

    return _install


@pytest.fixture
def raise_from_service(api_app):
    """Install a service that raises the given exception."""

    def _install(error: Exception) -> None:
        api_app.dependency_overrides[get_study_aid_service] = lambda: RaisingStudyAidService(error)

    return _install


class TestGenerateFlashcards:
    """Test suite for POST /api/v1/generate-flashcards."""

    def test_should_return_bare_array(self, api_client, use_model, sample_flashcard_payload) -> None:
        """Should respond with a JSON array of five cards."""
        use_model(TOPICS, json.dumps({"flashcards": sample_flashcard_payload}))

        response = api_client.post(
            "/api/v1/generate-flashcards", json={"fileKeys": ["uploads/math.pdf"]}
        )

        assert response.status_code == 200
        assert response.json() == sample_flashcard_payload

    def test_should_accept_single_file_key(self, api_client, use_model, sample_flashcard_payload) -> None:
        """Should accept the legacy fileKey field."""
        use_model(TOPICS, json.dumps(sample_flashcard_payload))

        response = api_client.post("/api/v1/generate-flashcards", json={"fileKey": "uploads/math.pdf"})

        assert response.status_code == 200
        assert len(response.json()) == 5

    def test_should_return_400_without_file_keys(self, api_client, use_model) -> None:
        """Should reject a body with no file keys."""
        use_model(TOPICS)

        response = api_client.post("/api/v1/generate-flashcards", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "No file keys provided"}

    def test_should_return_500_with_details_for_invalid_deck(
        self,
        api_client,
        use_model,
        make_flashcard_payload,
    ) -> None:
        """Should label the failure and give the validation reason."""
        use_model(TOPICS, json.dumps(make_flashcard_payload(4)))

        response = api_client.post("/api/v1/generate-flashcards", json={"fileKeys": ["uploads/math.pdf"]})

        body = response.json()
        assert response.status_code == 500
        assert body["error"] == "Failed to generate valid flashcards"
        assert body["details"] == "flashcards: expected exactly 5 flashcards, got 4"
        assert "timestamp" in body

    def test_should_return_500_when_no_document_has_text(self, api_client, use_model) -> None:
        """Should report that nothing could be extracted."""
        use_model(TOPICS)

        response = api_client.post("/api/v1/generate-flashcards", json={"fileKeys": ["uploads/blank.pdf"]})

        assert response.status_code == 500
        assert response.json()["details"] == "No content could be extracted from the provided documents"


class TestGenerateMCQ:
    """Test suite for POST /api/v1/generate-mcq."""

    def test_should_return_questions_with_camel_case_answer(
        self,
        api_client,
        use_model,
        sample_mcq_payload,
    ) -> None:
        """Should serialize correctAnswer under its wire name."""
        use_model(TOPICS, json.dumps(sample_mcq_payload))

        response = api_client.post(
            "/api/v1/generate-mcq",
            json={"fileKeys": ["uploads/math.pdf", "uploads/history.pdf"]},
        )

        assert response.status_code == 200
        assert response.json() == sample_mcq_payload

    def test_should_return_500_for_invalid_json(self, api_client, use_model) -> None:
        """Should report invalid model JSON as a generation failure."""
        use_model(TOPICS, "Sure! Here are your questions")

        response = api_client.post("/api/v1/generate-mcq", json={"fileKeys": ["uploads/math.pdf"]})

        body = response.json()
        assert response.status_code == 500
        assert body["error"] == "Generation Failed"
        assert body["details"].startswith("The model returned invalid JSON")

    def test_should_return_500_for_wrong_option_count(
        self,
        api_client,
        use_model,
        sample_mcq_payload,
    ) -> None:
        """Should name the offending question in the details."""
        sample_mcq_payload["questions"][2]["options"] = ["A", "B", "C"]
        use_model(TOPICS, json.dumps(sample_mcq_payload))

        response = api_client.post("/api/v1/generate-mcq", json={"fileKeys": ["uploads/math.pdf"]})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate valid MCQs"
        assert response.json()["details"] == "questions[2].options: expected exactly 4 options, got 3"


class TestGenerateMindMap:
    """Test suite for POST /api/v1/generate-mindmap."""

    def test_should_return_mind_map(self, api_client, use_model, sample_mindmap_payload) -> None:
        """Should serialize rootNode under its wire name."""
        use_model(TOPICS, json.dumps(sample_mindmap_payload))

        response = api_client.post("/api/v1/generate-mindmap", json={"fileKeys": ["uploads/math.pdf"]})

        body = response.json()
        assert response.status_code == 200
        assert body["title"] == "Calculus"
        assert body["rootNode"]["children"][0]["text"] == "Limits"

    def test_should_return_500_when_topics_are_missing(self, api_client, use_model) -> None:
        """Should report that topics could not be extracted."""
        use_model('{"topics": []}')

        response = api_client.post("/api/v1/generate-mindmap", json={"fileKeys": ["uploads/math.pdf"]})

        assert response.status_code == 500
        assert response.json()["details"] == "Could not extract topics from the content"


class TestSummarize:
    """Test suite for POST /api/v1/summarize."""

    def test_should_return_summary(self, api_client, use_model) -> None:
        """Should wrap the model output in a summary object."""
        use_model("Rome rose and fell.")

        response = api_client.post("/api/v1/summarize", json={"text": "A long text about Rome."})

        assert response.status_code == 200
        assert response.json() == {"summary": "Rome rose and fell."}

    def test_should_return_400_for_missing_text(self, api_client, use_model) -> None:
        """Should require non-empty text."""
        use_model("unused")

        response = api_client.post("/api/v1/summarize", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}


class TestErrorMapping:
    """Test suite for the shared error body mapping."""

    @pytest.mark.parametrize(
        ("route", "generic_message"),
        [
            ("/api/v1/generate-flashcards", "Error generating flashcards"),
            ("/api/v1/generate-mcq", "Error generating MCQs"),
            ("/api/v1/generate-mindmap", "Error generating mind map"),
        ],
    )
    def test_should_hide_infrastructure_errors(
        self,
        api_client,
        raise_from_service,
        route: str,
        generic_message: str,
    ) -> None:
        """Should return a generic 500 for vector index failures."""
        raise_from_service(VectorStoreError("Failed to query vectors: boom", operation="query"))

        response = api_client.post(route, json={"fileKeys": ["uploads/a.pdf"]})

        assert response.status_code == 500
        assert response.json() == {"error": generic_message}

    def test_should_hide_embedding_errors(self, api_client, raise_from_service) -> None:
        """Should return a generic 500 for embedding failures."""
        raise_from_service(EmbeddingError("Failed to embed chunk x: rate limited", "uploads/a.pdf"))

        response = api_client.post("/api/v1/generate-mcq", json={"fileKeys": ["uploads/a.pdf"]})

        assert response.status_code == 500
        assert response.json() == {"error": "Error generating MCQs"}

    def test_should_return_504_on_timeout(self, api_client, raise_from_service) -> None:
        """Should map an exhausted budget to 504."""
        raise_from_service(PipelineTimeoutError(60, "generate_mcq"))

        response = api_client.post("/api/v1/generate-mcq", json={"fileKeys": ["uploads/a.pdf"]})

        body = response.json()
        assert response.status_code == 504
        assert body["error"] == "Request timed out"
        assert body["details"] == "Request exceeded 60s budget"
        assert "timestamp" in body

    def test_should_return_400_for_invalid_request(self, api_client, raise_from_service) -> None:
        """Should return the request error message."""
        raise_from_service(InvalidRequestError("No file keys provided"))

        response = api_client.post("/api/v1/generate-mindmap", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "No file keys provided"}

    def test_should_return_500_with_details_for_generation_failures(
        self,
        api_client,
        raise_from_service,
    ) -> None:
        """Should expose the reason of generation failures."""
        raise_from_service(GenerationFailedError("summarize", "The model response did not contain any content"))

        response = api_client.post("/api/v1/summarize", json={"text": "x"})

        assert response.status_code == 500
        assert response.json()["details"] == "The model response did not contain any content"

    def test_should_return_400_for_malformed_body(self, api_client, raise_from_service) -> None:
        """Should map body validation errors to the common 400 body."""
        raise_from_service(RuntimeError("not reached"))

        response = api_client.post("/api/v1/generate-mcq", json={"fileKeys": "uploads/a.pdf"})

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "Invalid request"
        assert body["details"].startswith("fileKeys:")
