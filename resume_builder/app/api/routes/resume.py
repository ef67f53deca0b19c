import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from resume_builder.app.api.dependencies import get_resume
from resume_builder.app.api.routes.html_fragments import _generate_resume_list_html
from resume_builder.app.api.routes.route_logic.editor_session import (
    EditorSessionRegistry,
    get_editor_sessions,
)
from resume_builder.app.api.routes.route_logic.resume_crud import (
    ResumeCreateParams,
    ResumeUpdateParams,
    create_resume_from_draft,
    get_user_resumes,
)
from resume_builder.app.api.routes.route_logic.resume_crud import (
    create_resume as create_resume_db,
)
from resume_builder.app.api.routes.route_logic.resume_crud import (
    delete_resume as delete_resume_db,
)
from resume_builder.app.api.routes.route_logic.resume_crud import (
    update_resume as update_resume_db,
)
from resume_builder.app.api.routes.route_logic.resume_records import load_record_pool
from resume_builder.app.api.routes.route_models import (
    DraftResumeCreateRequest,
    ResumeCreateRequest,
    ResumeDetailResponse,
    ResumeResponse,
    TemplateResponse,
    TemplateUpdateRequest,
    content_from_request,
)
from resume_builder.app.core.templates import (
    has_template,
    list_templates,
    resolve_template_id,
)
from resume_builder.app.database.database import get_db
from resume_builder.app.models.content import (
    parse_resume_content,
    validate_resume_content,
)
from resume_builder.app.models.resume_model import Resume as DatabaseResume

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


@router.get("/templates", response_model=list[TemplateResponse])
async def get_templates() -> list[TemplateResponse]:
    """List the preview templates a resume can use."""
    return [
        TemplateResponse(id=t.id, name=t.name, description=t.description)
        for t in list_templates()
    ]


@router.get("")
async def list_resumes(
    http_request: Request,
    user_id: str,
    db: Session = Depends(get_db),
):
    """
    List a user's resumes, most recently updated first.

    Args:
        http_request (Request): The HTTP request object.
        user_id (str): The owner whose resumes are listed.
        db (Session): The database session dependency.

    Returns:
        list[ResumeResponse] | HTMLResponse: JSON for API calls, the list fragment for HTMX.

    """
    resumes = get_user_resumes(db, user_id=user_id)
    if "HX-Request" in http_request.headers:
        return HTMLResponse(_generate_resume_list_html(resumes))
    return [ResumeResponse.model_validate(resume) for resume in resumes]


@router.post("", response_model=ResumeResponse)
async def create_resume(
    request: ResumeCreateRequest,
    db: Session = Depends(get_db),
):
    """
    Create a resume.

    Args:
        request (ResumeCreateRequest): The resume name, owner, and optional content and template.
        db (Session): The database session dependency.

    Returns:
        ResumeResponse: The created resume.

    Raises:
        HTTPException: 422 if the content has the wrong shape or duplicates a section or
            reference id.

    Notes:
        1. Without content, the resume starts with empty Experience, Skills and Education sections.
        2. Client content is checked against the document invariants before it is stored.

    """
    content = None
    if request.content is not None:
        try:
            content = validate_resume_content(content_from_request(request.content))
        except (ValidationError, ValueError) as e:
            _msg = f"Invalid resume content: {e}"
            log.info(_msg)
            raise HTTPException(status_code=422, detail=_msg)

    resume = create_resume_db(
        db,
        ResumeCreateParams(
            user_id=request.user_id,
            name=request.name,
            content=content,
            template_id=request.template_id,
        ),
    )
    return ResumeResponse.model_validate(resume)


@router.post("/from-draft", response_model=ResumeResponse)
async def create_resume_from_draft_endpoint(
    request: DraftResumeCreateRequest,
    db: Session = Depends(get_db),
):
    """Create a resume whose Experience section holds the draft's bullets, in order."""
    resume = create_resume_from_draft(
        db,
        user_id=request.user_id,
        name=request.name,
        bullet_ids=request.bullet_ids,
    )
    return ResumeResponse.model_validate(resume)


@router.get("/{resume_id}", response_model=ResumeDetailResponse)
async def get_resume_detail(
    db: Session = Depends(get_db),
    resume: DatabaseResume = Depends(get_resume),
):
    """
    Get a resume with its parsed content and the records that content references.

    Args:
        db (Session): The database session dependency.
        resume (DatabaseResume): The resume, from dependency.

    Returns:
        ResumeDetailResponse: The resume, its content and its record pools.

    Notes:
        1. Stored content that is missing or malformed is returned as the default content.
        2. References with no record are absent from the pools; clients skip them.

    """
    content = parse_resume_content(resume.content)
    pool = load_record_pool(db, content)
    return ResumeDetailResponse(
        id=resume.id,
        name=resume.name,
        template_id=resolve_template_id(resume.template_id),
        content=content.to_storage(),
        bullets=pool.bullets,
        positions=pool.positions,
    )


@router.put("/{resume_id}/template", response_model=ResumeResponse)
async def update_template(
    request: TemplateUpdateRequest,
    db: Session = Depends(get_db),
    resume: DatabaseResume = Depends(get_resume),
):
    """
    Choose the preview template of a resume.

    Raises:
        HTTPException: 422 if the template id is unknown.

    Notes:
        1. Legacy ids are stored as their current id.

    """
    if not has_template(request.template_id):
        raise HTTPException(
            status_code=422,
            detail=f"Unknown template: {request.template_id}",
        )
    resume = update_resume_db(
        db,
        resume,
        ResumeUpdateParams(template_id=resolve_template_id(request.template_id)),
    )
    return ResumeResponse.model_validate(resume)


@router.delete("/{resume_id}", status_code=204)
async def delete_resume(
    db: Session = Depends(get_db),
    resume: DatabaseResume = Depends(get_resume),
    sessions: EditorSessionRegistry = Depends(get_editor_sessions),
) -> Response:
    """Delete a resume and drop its editor session, if any."""
    sessions.close(resume.id)
    delete_resume_db(db, resume)
    return Response(status_code=204)
