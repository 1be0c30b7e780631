"""
===============================================================================
TARJETA CRC — routers/documents.py
===============================================================================

Responsabilidades:
  - Exponer endpoints HTTP de documentos y roles.
  - Traducir HTTP -> casos de uso (actor explícito desde el JWT).
  - Mapear errores tipados a RFC7807 (error_mapping).

Colaboradores:
  - container.get_*_use_case (factories)
  - identity.auth_users.require_user (actor autenticado)
  - schemas.documents (DTOs)

Patterns:
  - Controller / Router
  - Adapter (HTTP -> UseCase)
  - Error Mapping
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from docshare.application.usecases import (
    CreateDocumentInput,
    CreateDocumentUseCase,
    DeleteDocumentUseCase,
    FindDocumentByNameUseCase,
    GetDocumentUseCase,
    GrantRoleUseCase,
    ListRoleAssignmentsUseCase,
    ListVisibleDocumentsUseCase,
    RemoveRoleUseCase,
)
from docshare.container import (
    get_create_document_use_case,
    get_delete_document_use_case,
    get_find_document_by_name_use_case,
    get_get_document_use_case,
    get_grant_role_use_case,
    get_list_role_assignments_use_case,
    get_list_visible_documents_use_case,
    get_remove_role_use_case,
)
from docshare.domain.document_policy import DocumentActor
from docshare.domain.entities import Document
from docshare.identity.auth_users import require_user
from fastapi import APIRouter, Depends, Query, Response

from ..error_mapping import raise_document_error
from ..schemas.documents import (
    CreateDocumentReq,
    DocumentRes,
    RoleAssignmentRes,
    RoleAssignmentsRes,
    RoleChangeReq,
    RoleChangeRes,
    VisibleDocumentRes,
    VisibleDocumentsRes,
)

router = APIRouter()


def _to_document_res(document: Document) -> DocumentRes:
    return DocumentRes(
        id=document.id,
        name=document.name,
        description=document.description,
        owner_user_id=document.owner_user_id,
        created_at=document.created_at,
    )


# =============================================================================
# Documentos
# =============================================================================


@router.post(
    "/documents",
    response_model=DocumentRes,
    status_code=201,
    tags=["documents"],
)
def create_document(
    req: CreateDocumentReq,
    use_case: CreateDocumentUseCase = Depends(get_create_document_use_case),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(
        CreateDocumentInput(name=req.name, description=req.description, actor=actor)
    )
    if result.error is not None:
        raise_document_error(result.error)
    return _to_document_res(result.document)


@router.get(
    "/documents",
    response_model=VisibleDocumentsRes,
    tags=["documents"],
)
def list_visible_documents(
    use_case: ListVisibleDocumentsUseCase = Depends(
        get_list_visible_documents_use_case
    ),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(actor)
    if result.error is not None:
        raise_document_error(result.error)
    return VisibleDocumentsRes(
        documents=[
            VisibleDocumentRes(
                document_id=doc.document_id,
                name=doc.name,
                description=doc.description,
                role=doc.role,
            )
            for doc in result.documents
        ]
    )


# Debe declararse antes de /documents/{document_id}.
@router.get(
    "/documents/lookup",
    response_model=DocumentRes,
    tags=["documents"],
)
def find_document_by_name(
    name: str = Query(..., min_length=1),
    use_case: FindDocumentByNameUseCase = Depends(get_find_document_by_name_use_case),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(name, actor)
    if result.error is not None:
        raise_document_error(result.error)
    return _to_document_res(result.document)


@router.get(
    "/documents/{document_id}",
    response_model=DocumentRes,
    tags=["documents"],
)
def get_document(
    document_id: UUID,
    use_case: GetDocumentUseCase = Depends(get_get_document_use_case),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(document_id, actor)
    if result.error is not None:
        raise_document_error(result.error)
    return _to_document_res(result.document)


@router.delete(
    "/documents/{document_id}",
    status_code=204,
    tags=["documents"],
)
def delete_document(
    document_id: UUID,
    use_case: DeleteDocumentUseCase = Depends(get_delete_document_use_case),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(document_id, actor)
    if result.error is not None:
        raise_document_error(result.error)
    return Response(status_code=204)


# =============================================================================
# Roles
# =============================================================================


@router.get(
    "/documents/{document_id}/roles",
    response_model=RoleAssignmentsRes,
    tags=["roles"],
)
def list_role_assignments(
    document_id: UUID,
    use_case: ListRoleAssignmentsUseCase = Depends(
        get_list_role_assignments_use_case
    ),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(document_id, actor)
    if result.error is not None:
        raise_document_error(result.error)
    return RoleAssignmentsRes(
        document_id=document_id,
        assignments=[
            RoleAssignmentRes(role=a.role, email=a.email) for a in result.assignments
        ],
    )


@router.post(
    "/documents/{document_id}/roles",
    response_model=RoleChangeRes,
    tags=["roles"],
)
def grant_role(
    document_id: UUID,
    req: RoleChangeReq,
    use_case: GrantRoleUseCase = Depends(get_grant_role_use_case),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(document_id, actor, email=req.email, role=req.role)
    if result.error is not None:
        raise_document_error(result.error)
    return RoleChangeRes(
        document_id=document_id,
        email=req.email,
        role=req.role,
        changed=result.changed,
    )


@router.post(
    "/documents/{document_id}/roles/revoke",
    response_model=RoleChangeRes,
    tags=["roles"],
)
def revoke_role(
    document_id: UUID,
    req: RoleChangeReq,
    use_case: RemoveRoleUseCase = Depends(get_remove_role_use_case),
    actor: DocumentActor = Depends(require_user()),
):
    result = use_case.execute(document_id, actor, email=req.email, role=req.role)
    if result.error is not None:
        raise_document_error(result.error)
    return RoleChangeRes(
        document_id=document_id,
        email=req.email,
        role=req.role,
        changed=result.changed,
    )
