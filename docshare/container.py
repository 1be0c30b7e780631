"""
===============================================================================
TARJETA CRC — docshare/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para los repositorios.
  - Centralizar decisiones runtime basadas en Settings (in-memory vs Postgres).

Colaboradores:
  - docshare.crosscutting.config.get_settings
  - docshare.domain.repositories.* (puertos)
  - docshare.infrastructure.repositories.* (implementaciones)
  - docshare.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - Tests: llamar reset_container() para limpiar los singletons.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateDocumentUseCase,
    DeleteDocumentUseCase,
    FindDocumentByNameUseCase,
    GetDocumentUseCase,
    GrantRoleUseCase,
    ListRoleAssignmentsUseCase,
    ListVisibleDocumentsUseCase,
    RemoveRoleUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import DocumentRepository, UserDirectory
from .infrastructure.repositories import (
    InMemoryDocumentRepository,
    InMemoryUserDirectory,
    PostgresDocumentRepository,
    PostgresUserDirectory,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_document_repository() -> DocumentRepository:
    """Repositorio de documentos (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryDocumentRepository()
    return PostgresDocumentRepository()


@lru_cache(maxsize=1)
def get_user_directory() -> UserDirectory:
    """Directorio de usuarios (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryUserDirectory()
    return PostgresUserDirectory()


def reset_container() -> None:
    """Limpia singletons cacheados (tests)."""
    get_document_repository.cache_clear()
    get_user_directory.cache_clear()


# =============================================================================
# Casos de uso (factories, uno por request)
# =============================================================================


def get_create_document_use_case() -> CreateDocumentUseCase:
    settings = get_settings()
    return CreateDocumentUseCase(
        repository=get_document_repository(),
        max_name_chars=settings.max_name_chars,
        max_description_chars=settings.max_description_chars,
    )


def get_get_document_use_case() -> GetDocumentUseCase:
    return GetDocumentUseCase(document_repository=get_document_repository())


def get_find_document_by_name_use_case() -> FindDocumentByNameUseCase:
    return FindDocumentByNameUseCase(document_repository=get_document_repository())


def get_list_visible_documents_use_case() -> ListVisibleDocumentsUseCase:
    return ListVisibleDocumentsUseCase(document_repository=get_document_repository())


def get_list_role_assignments_use_case() -> ListRoleAssignmentsUseCase:
    """Caso de uso: listar roles (resolución de emails en paralelo)."""
    return ListRoleAssignmentsUseCase(
        document_repository=get_document_repository(),
        user_directory=get_user_directory(),
        max_workers=get_settings().role_lookup_max_workers,
    )


def get_grant_role_use_case() -> GrantRoleUseCase:
    return GrantRoleUseCase(
        document_repository=get_document_repository(),
        user_directory=get_user_directory(),
    )


def get_remove_role_use_case() -> RemoveRoleUseCase:
    return RemoveRoleUseCase(
        document_repository=get_document_repository(),
        user_directory=get_user_directory(),
    )


def get_delete_document_use_case() -> DeleteDocumentUseCase:
    return DeleteDocumentUseCase(document_repository=get_document_repository())
