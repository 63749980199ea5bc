"""Content clusters API router.

REST endpoints for generating enhanced content clusters from keyword
research, persisting them for the caller's organization, and listing
saved clusters and their content ideas.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from clusterplan.core.auth import UserInfo, get_current_user
from clusterplan.core.database import get_session
from clusterplan.core.logging import get_logger
from clusterplan.schemas.content_cluster import (
    ClusterGenerationRequest,
    ClusterGenerationResponse,
    ContentClusterResponse,
    ContentIdeaResponse,
    SaveClustersRequest,
    SaveClustersResponse,
)
from clusterplan.services.cluster_persistence import (
    ClusterPersistenceGateway,
    PersistenceErrorCode,
)
from clusterplan.services.content_clusters import (
    ContentClusterGenerationError,
    get_content_cluster_service,
)

logger = get_logger(__name__)

router = APIRouter()

PERSISTENCE_ERROR_STATUS: dict[PersistenceErrorCode, int] = {
    PersistenceErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    PersistenceErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    PersistenceErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    PersistenceErrorCode.ORGANIZATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    PersistenceErrorCode.TABLE_ACCESS: status.HTTP_503_SERVICE_UNAVAILABLE,
    PersistenceErrorCode.INSERT_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_request_id(request: Request) -> str:
    """Get request_id from request state."""
    return getattr(request.state, "request_id", "unknown")


def _error_response(status_code: int, error: str, code: str, request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "code": code, "request_id": request_id},
    )


def _generation_failed(
    e: ContentClusterGenerationError, request_id: str
) -> JSONResponse:
    logger.error(
        "Cluster generation failed",
        extra={
            "request_id": request_id,
            "cluster_name": e.cluster_name,
            "error_message": str(e),
        },
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(e),
        "GENERATION_FAILED",
        request_id,
    )


@router.post(
    "/generate",
    response_model=ClusterGenerationResponse,
    summary="Generate enhanced content clusters",
    description="Plan clusters and article ideas from keyword research. Nothing is saved.",
)
async def generate_clusters(
    request: Request,
    data: ClusterGenerationRequest,
    user: UserInfo = Depends(get_current_user),
) -> ClusterGenerationResponse | JSONResponse:
    """Generate a content plan from keyword research results."""
    request_id = _get_request_id(request)
    logger.debug(
        "Generate clusters request",
        extra={
            "request_id": request_id,
            "user_id": user.id,
            "cluster_group_count": len(
                data.research_results.keyword_analysis.cluster_groups
            ),
        },
    )

    try:
        return get_content_cluster_service().generate_clusters_from_research(data)
    except ContentClusterGenerationError as e:
        return _generation_failed(e, request_id)


@router.post(
    "",
    response_model=SaveClustersResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate and save enhanced content clusters",
    description="Plan clusters from keyword research and persist them with their ideas.",
)
async def save_clusters(
    request: Request,
    data: SaveClustersRequest,
    session: AsyncSession = Depends(get_session),
    user: UserInfo = Depends(get_current_user),
) -> SaveClustersResponse | JSONResponse:
    """Generate clusters and save them for the authenticated user."""
    request_id = _get_request_id(request)
    logger.debug(
        "Save clusters request",
        extra={"request_id": request_id, "user_id": user.id},
    )

    try:
        plan = get_content_cluster_service().generate_clusters_from_research(
            data.request
        )
    except ContentClusterGenerationError as e:
        return _generation_failed(e, request_id)

    gateway = ClusterPersistenceGateway(session)
    result = await gateway.save_enhanced_clusters(
        caller=user,
        user_id=user.id,
        clusters=plan.clusters,
        articles=plan.articles,
    )

    if not result.success or result.error is not None:
        error = result.error
        code = error.code if error else PersistenceErrorCode.INSERT_FAILED
        message = error.message if error else "Failed to save clusters"
        logger.warning(
            "Cluster save failed",
            extra={
                "request_id": request_id,
                "user_id": user.id,
                "failure_code": code.value,
            },
        )
        return _error_response(
            PERSISTENCE_ERROR_STATUS[code], message, code.value.upper(), request_id
        )

    logger.info(
        "Clusters saved",
        extra={
            "request_id": request_id,
            "user_id": user.id,
            "cluster_ids": result.cluster_ids,
        },
    )
    return SaveClustersResponse(
        cluster_ids=result.cluster_ids,
        total_articles_generated=plan.total_articles_generated,
        content_strategy_summary=plan.content_strategy_summary,
        traffic_estimates=plan.traffic_estimates,
        recommendations=plan.recommendations,
    )


@router.get(
    "",
    response_model=list[ContentClusterResponse],
    summary="List saved content clusters",
    description="List the caller's clusters in their organization, newest first.",
)
async def list_clusters(
    request: Request,
    session: AsyncSession = Depends(get_session),
    user: UserInfo = Depends(get_current_user),
) -> list[ContentClusterResponse]:
    """List the authenticated user's clusters."""
    request_id = _get_request_id(request)
    logger.debug(
        "List clusters request",
        extra={"request_id": request_id, "user_id": user.id},
    )

    gateway = ClusterPersistenceGateway(session)
    org_id = await gateway.resolve_org_id(user.id)
    if org_id is None:
        return []

    clusters = await gateway.list_user_clusters(user.id, org_id)
    return [ContentClusterResponse.model_validate(c) for c in clusters]


@router.get(
    "/{cluster_id}/ideas",
    response_model=list[ContentIdeaResponse],
    summary="List content ideas of a cluster",
    description="List a cluster's ideas by priority, highest first.",
    responses={
        404: {
            "description": "Cluster not found in the caller's organization",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Content cluster not found: <uuid>",
                        "code": "NOT_FOUND",
                        "request_id": "<request_id>",
                    }
                }
            },
        }
    },
)
async def list_cluster_ideas(
    request: Request,
    cluster_id: str,
    session: AsyncSession = Depends(get_session),
    user: UserInfo = Depends(get_current_user),
) -> list[ContentIdeaResponse] | JSONResponse:
    """List the content ideas of one cluster in the caller's organization."""
    request_id = _get_request_id(request)
    logger.debug(
        "List cluster ideas request",
        extra={"request_id": request_id, "cluster_id": cluster_id},
    )

    gateway = ClusterPersistenceGateway(session)
    org_id = await gateway.resolve_org_id(user.id)
    cluster = (
        await gateway.get_cluster(cluster_id, org_id) if org_id is not None else None
    )
    if cluster is None:
        logger.warning(
            "Content cluster not found",
            extra={"request_id": request_id, "cluster_id": cluster_id},
        )
        return _error_response(
            status.HTTP_404_NOT_FOUND,
            f"Content cluster not found: {cluster_id}",
            "NOT_FOUND",
            request_id,
        )

    ideas = await gateway.list_cluster_ideas(cluster_id)
    return [ContentIdeaResponse.model_validate(i) for i in ideas]
