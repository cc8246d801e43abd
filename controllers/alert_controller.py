"""
Alert controller
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from database.store import DocumentStore, get_store
from schemas.alert import Alert, AlertType, AlertUpdate, ResolveAlertRequest
from services.alerts import AlertService
from utils.exceptions import NotFoundError

router = APIRouter()


def get_alerts(store: DocumentStore = Depends(get_store)) -> AlertService:
    return AlertService(store)


@router.post("/", response_model=Alert, status_code=201)
async def create_alert(alert: Alert, alerts: AlertService = Depends(get_alerts)):
    return await alerts.create(alert)


@router.get("/", response_model=List[Alert])
async def list_alerts(
    patient_id: Optional[str] = Query(None, description="Filter by patient ID"),
    type: Optional[AlertType] = Query(None, description="Filter by alert type"),
    provider_id: Optional[str] = Query(None, description="Filter by assignee"),
    tag: Optional[str] = Query(None, description="Filter by tag name"),
    alerts: AlertService = Depends(get_alerts),
):
    if patient_id is not None:
        return await alerts.get_by_patient_id(patient_id)
    if type is not None:
        return await alerts.get_by_type(type)
    if provider_id is not None:
        return await alerts.get_by_assigned_provider(provider_id)
    if tag is not None:
        return await alerts.get_by_tag(tag)
    return await alerts.get_all()


@router.get("/action-required", response_model=List[Alert])
async def alerts_requiring_action(alerts: AlertService = Depends(get_alerts)):
    return await alerts.get_requiring_action()


@router.get("/resolved", response_model=List[Alert])
async def resolved_alerts(alerts: AlertService = Depends(get_alerts)):
    return await alerts.get_resolved()


@router.get("/{alert_id}", response_model=Alert)
async def get_alert(alert_id: str, alerts: AlertService = Depends(get_alerts)):
    alert = await alerts.get_by_id(alert_id)
    if not alert:
        raise NotFoundError("Alert not found")
    return alert


@router.put("/{alert_id}", response_model=Alert)
async def update_alert(
    alert_id: str, alert_data: AlertUpdate, alerts: AlertService = Depends(get_alerts)
):
    return await alerts.update(alert_id, alert_data.model_dump(exclude_unset=True))


@router.post("/{alert_id}/resolve", response_model=Alert)
async def resolve_alert(
    alert_id: str,
    request: ResolveAlertRequest,
    alerts: AlertService = Depends(get_alerts),
):
    return await alerts.resolve(alert_id, request.resolving_provider_id)


@router.post("/{alert_id}/reopen", response_model=Alert)
async def reopen_alert(alert_id: str, alerts: AlertService = Depends(get_alerts)):
    return await alerts.reopen(alert_id)


@router.delete("/{alert_id}")
async def delete_alert(alert_id: str, alerts: AlertService = Depends(get_alerts)):
    await alerts.delete(alert_id)
    return {"message": "Alert deleted successfully", "alert_id": alert_id}
