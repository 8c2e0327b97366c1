from fastapi import APIRouter, Depends, Response

from marathon.api.deps import get_plan_repository, require_principal
from marathon.domain.User import Principal
from marathon.infra.Plan_Repository import PlanRepository
from marathon.infra.pdf_utils import generate_pdf_for_plan
from marathon.logic.plans import lifecycle
from marathon.logic.reporting.statistics import summarize_plans, stats_to_api
from marathon.utilities.validators import PlanCreateInput, DayResultInput, RestartInput

router = APIRouter(prefix="/api/plans")


@router.post("")
def api_create_plan(payload: PlanCreateInput,
                    repo: PlanRepository = Depends(get_plan_repository),
                    principal: Principal = Depends(require_principal)):
    plan, _ = lifecycle.create_plan(repo, principal, payload.name, payload.start_wager,
                                    payload.odds, payload.days)
    return {"plan": plan.to_api()}


@router.get("")
def api_list_plans(repo: PlanRepository = Depends(get_plan_repository),
                   principal: Principal = Depends(require_principal)):
    return {"plans": [p.to_api() for p in lifecycle.list_plans(repo, principal)]}


@router.get("/summary")
def api_plans_summary(repo: PlanRepository = Depends(get_plan_repository),
                      principal: Principal = Depends(require_principal)):
    return stats_to_api(summarize_plans(lifecycle.list_plans(repo, principal)))


@router.get("/{plan_id}")
def api_get_plan(plan_id: str,
                 repo: PlanRepository = Depends(get_plan_repository),
                 principal: Principal = Depends(require_principal)):
    plan, entries, stats = lifecycle.get_plan_detail(repo, principal, plan_id)
    return {
        "plan": plan.to_api(),
        "dayEntries": [e.to_api() for e in entries],
        "stats": stats_to_api(stats),
    }


@router.delete("/{plan_id}")
def api_delete_plan(plan_id: str,
                    repo: PlanRepository = Depends(get_plan_repository),
                    principal: Principal = Depends(require_principal)):
    lifecycle.delete_plan(repo, principal, plan_id)
    return {"message": "Plan deleted successfully"}


@router.patch("/{plan_id}/days/{day}")
def api_update_day_result(plan_id: str, day: int, payload: DayResultInput,
                          repo: PlanRepository = Depends(get_plan_repository),
                          principal: Principal = Depends(require_principal)):
    plan, entry = lifecycle.update_day_result(repo, principal, plan_id, day, payload.result)
    return {
        "message": "Day result updated successfully",
        "plan": plan.to_api(),
        "entry": entry.to_api(),
    }


@router.post("/{plan_id}/restart")
def api_restart_plan(plan_id: str, payload: RestartInput,
                     repo: PlanRepository = Depends(get_plan_repository),
                     principal: Principal = Depends(require_principal)):
    plan, entries = lifecycle.restart_plan(repo, principal, plan_id, payload.day)
    return {
        "message": "Plan restarted successfully",
        "plan": plan.to_api(),
        "dayEntries": [e.to_api() for e in entries],
    }


@router.get("/{plan_id}/export_pdf")
def api_export_pdf(plan_id: str,
                   repo: PlanRepository = Depends(get_plan_repository),
                   principal: Principal = Depends(require_principal)):
    plan, entries, stats = lifecycle.get_plan_detail(repo, principal, plan_id)
    pdf_bytes = generate_pdf_for_plan(plan, entries, stats)
    filename = f"plan_{plan.id}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
