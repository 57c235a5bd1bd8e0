"""
Dependency injection module.

Exports: get_chat_service, get_study_aid_service, get_service_cache, ServiceCache
"""

from notchy.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_service_cache,
    get_settings_dependency,
    get_study_aid_service,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_study_aid_service",
]
