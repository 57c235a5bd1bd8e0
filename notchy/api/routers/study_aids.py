"""
Study-aid API endpoints.

Routes:
- POST /generate-flashcards
- POST /generate-mcq
- POST /generate-mindmap
- POST /summarize

Dependencies: notchy.application.services.study_aid_service
System role: Study-aid generation HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from notchy.api.deps import get_study_aid_service
from notchy.api.routers.router_utils import handle_pipeline_errors
from notchy.application.services import StudyAidService
from notchy.models.artifacts import Flashcard, MCQSet, MindMap
from notchy.models.errors import ErrorResponse
from notchy.models.requests import FileKeysRequest, SummarizeRequest, SummaryResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["study-aids"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


@router.post("/generate-flashcards", response_model=list[Flashcard], responses=ERROR_RESPONSES)
@handle_pipeline_errors("Error generating flashcards")
async def generate_flashcards(
    request: FileKeysRequest,
    service: StudyAidService = Depends(get_study_aid_service),
):
    """Generate exactly five flashcards, returned as a bare JSON array."""
    deck = await service.generate_flashcards(request.resolved_file_keys())
    return deck.root


@router.post("/generate-mcq", response_model=MCQSet, responses=ERROR_RESPONSES)
@handle_pipeline_errors("Error generating MCQs")
async def generate_mcq(
    request: FileKeysRequest,
    service: StudyAidService = Depends(get_study_aid_service),
):
    """Generate exactly five multiple-choice questions."""
    return await service.generate_mcq(request.resolved_file_keys())


@router.post("/generate-mindmap", response_model=MindMap, responses=ERROR_RESPONSES)
@handle_pipeline_errors("Error generating mind map")
async def generate_mindmap(
    request: FileKeysRequest,
    service: StudyAidService = Depends(get_study_aid_service),
):
    """Generate a hierarchical mind map."""
    return await service.generate_mindmap(request.resolved_file_keys())


@router.post("/summarize", response_model=SummaryResponse, responses=ERROR_RESPONSES)
@handle_pipeline_errors("Failed to generate summary")
async def summarize(
    request: SummarizeRequest,
    service: StudyAidService = Depends(get_study_aid_service),
):
    """Summarize free text."""
    summary = await service.summarize(request.text)
    return SummaryResponse(summary=summary)
