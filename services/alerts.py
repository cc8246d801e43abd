"""
Patient alerts and their resolution state
"""

import logging
from typing import List

from database.store import DocumentStore
from schemas.alert import Alert, AlertType
from schemas.common import utcnow
from services.collection import Collection, require_key
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AlertService(Collection[Alert]):
    required_fields = ("id", "type", "patient.id")

    def __init__(self, store: DocumentStore):
        super().__init__(store, "alerts", Alert, "Alert")

    def prepare_new(self, alert, items):
        if alert.created_date is None:
            alert.created_date = utcnow()
        return alert

    async def get_by_patient_id(self, patient_id: str) -> List[Alert]:
        return await self.filter_by("patient.id", patient_id, "Patient ID")

    async def get_by_type(self, alert_type: AlertType) -> List[Alert]:
        require_key(alert_type, "Alert type")
        return await self.filter(lambda a: a.type == alert_type)

    async def get_requiring_action(self) -> List[Alert]:
        return await self.filter(lambda a: a.action_required and a.resolved_date is None)

    async def get_resolved(self) -> List[Alert]:
        return await self.filter(lambda a: a.resolved_date is not None)

    async def get_by_assigned_provider(self, provider_id: str) -> List[Alert]:
        return await self.filter_by("assigned_provider.id", provider_id, "Provider ID")

    async def get_by_tag(self, tag_name: str) -> List[Alert]:
        require_key(tag_name, "Tag name")
        return await self.filter(lambda a: any(t.name == tag_name for t in a.tags))

    async def resolve(self, alert_id: str, provider_id: str) -> Alert:
        require_key(alert_id, "Alert ID")
        require_key(provider_id, "Resolving provider ID")
        async with self.mutate() as items:
            alert = items[self.index_of(items, alert_id)]
            provider = alert.assigned_provider
            if provider is None or provider.id != provider_id:
                raise ValidationError(
                    f"Provider {provider_id} is not assigned to alert {alert_id}"
                )
            alert.resolved_date = utcnow()
            alert.resolving_provider = provider
            alert.action_required = False
        logger.info(f"Alert {alert_id} resolved by {provider_id}")
        return alert

    async def reopen(self, alert_id: str) -> Alert:
        require_key(alert_id, "Alert ID")
        async with self.mutate() as items:
            alert = items[self.index_of(items, alert_id)]
            alert.resolved_date = None
            alert.resolving_provider = None
            alert.action_required = True
        logger.info(f"Alert {alert_id} reopened")
        return alert
