"""In-memory repository: tenant-scoped indexes over prospects, signals, contacts."""

from __future__ import annotations

from sales_intel.data.models import (
    Contact,
    ContactActivity,
    ContactEnrichment,
    Prospect,
    ProspectSignal,
)


class InMemoryRepository:
    """Implements both :class:`ProspectRepository` and :class:`ContactRepository`.

    Prospects, contacts and enrichments are returned in insertion order;
    signals and activities newest first, matching the ordering of the
    SQL-backed repositories.
    """

    def __init__(self) -> None:
        self._prospects: dict[str, Prospect] = {}
        self._by_tenant: dict[str, list[str]] = {}
        self._signals: dict[str, list[ProspectSignal]] = {}
        self._contacts: dict[str, list[Contact]] = {}
        self._activities: dict[str, list[ContactActivity]] = {}
        self._enrichments: dict[str, list[ContactEnrichment]] = {}

    def add_prospect(self, prospect: Prospect) -> None:
        if prospect.id in self._prospects:
            raise ValueError(f"Duplicate prospect id registered: {prospect.id!r}")
        self._prospects[prospect.id] = prospect
        self._by_tenant.setdefault(prospect.tenant_id, []).append(prospect.id)

    def add_signal(self, signal: ProspectSignal) -> None:
        self._signals.setdefault(signal.prospect_id, []).append(signal)

    def add_contact(self, contact: Contact) -> None:
        self._contacts.setdefault(contact.tenant_id, []).append(contact)

    def add_activity(self, activity: ContactActivity) -> None:
        self._activities.setdefault(activity.contact_id, []).append(activity)

    def add_enrichment(self, enrichment: ContactEnrichment) -> None:
        self._enrichments.setdefault(enrichment.contact_id, []).append(enrichment)

    async def select_prospects_by_tenant_id(
        self,
        tenant_id: str,
        *,
        limit: int = 100,
        min_fit_score: int | None = None,
    ) -> list[Prospect]:
        prospects = [self._prospects[pid] for pid in self._by_tenant.get(tenant_id, [])]
        if min_fit_score is not None:
            prospects = [
                p for p in prospects
                if p.fit_score is not None and p.fit_score >= min_fit_score
            ]
        return prospects[:limit]

    async def select_prospect_by_id(
        self, prospect_id: str, tenant_id: str,
    ) -> Prospect | None:
        prospect = self._prospects.get(prospect_id)
        if prospect is None or prospect.tenant_id != tenant_id:
            return None
        return prospect

    async def select_signals_by_prospect_id(
        self, prospect_id: str, tenant_id: str,
    ) -> list[ProspectSignal]:
        signals = [
            s for s in self._signals.get(prospect_id, [])
            if s.tenant_id == tenant_id
        ]
        return sorted(signals, key=lambda s: s.detected_at, reverse=True)

    async def select_contacts_by_tenant_id(
        self,
        tenant_id: str,
        *,
        prospect_id: str | None = None,
    ) -> list[Contact]:
        contacts = self._contacts.get(tenant_id, [])
        if prospect_id is not None:
            contacts = [c for c in contacts if c.prospect_id == prospect_id]
        return list(contacts)

    async def select_contact_by_id(
        self, contact_id: str, tenant_id: str,
    ) -> Contact | None:
        for contact in self._contacts.get(tenant_id, []):
            if contact.id == contact_id:
                return contact
        return None

    async def select_activities_by_contact_id(
        self, contact_id: str, tenant_id: str, *, limit: int = 20,
    ) -> list[ContactActivity]:
        activities = [
            a for a in self._activities.get(contact_id, [])
            if a.tenant_id == tenant_id
        ]
        activities.sort(key=lambda a: a.created_at, reverse=True)
        return activities[:limit]

    async def select_enrichments_by_contact_id(
        self, contact_id: str, tenant_id: str,
    ) -> list[ContactEnrichment]:
        return [
            e for e in self._enrichments.get(contact_id, [])
            if e.tenant_id == tenant_id
        ]
