"""Whole-graph dependency API: cycle check, statistics, integrity report, module auto-resolve."""

from typing import Annotated

from fastapi import APIRouter, Depends

from permgraph.api.v1.dependencies import (
    get_dependency_service,
    get_dependency_service_for_write,
)
from permgraph.application.dtos.dependency import DependencyPlan
from permgraph.application.services.dependency_service import DependencyService
from permgraph.application.services.precedence_policy import PrecedencePolicy
from permgraph.schemas.dependency import (
    CycleReportResponse,
    DependencyBatchResponse,
    DependencyPlanResponse,
    GraphStatisticsResponse,
    IntegrityReportResponse,
    ModuleAutoResolveRequest,
)

router = APIRouter()


@router.get("/cycles", response_model=CycleReportResponse)
async def detect_cycle(
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
):
    """Report the first cycle found in the stored graph, if any."""
    report = await dependency_service.detect_cycle()
    return CycleReportResponse.model_validate(report)


@router.get("/statistics", response_model=GraphStatisticsResponse)
async def get_statistics(
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
):
    stats = await dependency_service.statistics()
    return GraphStatisticsResponse.model_validate(stats)


@router.get("/integrity", response_model=IntegrityReportResponse)
async def get_integrity_report(
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
):
    """Self dependencies, duplicate rows, orphan edges and cycles in stored data."""
    report = await dependency_service.integrity_issues()
    return IntegrityReportResponse.model_validate(report)


@router.post(
    "/auto-resolve",
    response_model=DependencyBatchResponse | DependencyPlanResponse,
)
async def auto_resolve_module(
    body: ModuleAutoResolveRequest,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service_for_write)],
):
    """Apply the precedence policy to every permission in a module; skipped items carry reasons."""
    policy = PrecedencePolicy.from_mapping(body.policy) if body.policy is not None else None
    result = await dependency_service.auto_resolve_module(
        body.module, policy=policy, dry_run=body.dry_run
    )
    if isinstance(result, DependencyPlan):
        return DependencyPlanResponse.model_validate(result)
    return DependencyBatchResponse.model_validate(result)
