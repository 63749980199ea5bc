"""API v1 router and endpoint organization."""

from fastapi import APIRouter

from clusterplan.api.v1 import content_clusters

router = APIRouter(prefix="/api/v1", tags=["v1"])

# Include domain-specific routers
router.include_router(
    content_clusters.router,
    prefix="/content-clusters",
    tags=["Content Clusters"],
)
