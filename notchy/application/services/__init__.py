"""
Application services.

Exports: ChatService, StudyAidService
"""

from notchy.application.services.chat_service import ChatService
from notchy.application.services.study_aid_service import StudyAidService

__all__ = ["ChatService", "StudyAidService"]
