"""Repository protocols: implemented by the persistence layer, not this package."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sales_intel.data.models import (
    Contact,
    ContactActivity,
    ContactEnrichment,
    Prospect,
    ProspectSignal,
)


@runtime_checkable
class ProspectRepository(Protocol):
    """Read access to prospects and their signals, scoped by tenant.

    Implementations may raise on storage failure; callers in this package
    never catch those errors.
    """

    async def select_prospects_by_tenant_id(
        self,
        tenant_id: str,
        *,
        limit: int = 100,
        min_fit_score: int | None = None,
    ) -> list[Prospect]: ...

    async def select_prospect_by_id(
        self, prospect_id: str, tenant_id: str,
    ) -> Prospect | None: ...

    async def select_signals_by_prospect_id(
        self, prospect_id: str, tenant_id: str,
    ) -> list[ProspectSignal]: ...


@runtime_checkable
class ContactRepository(Protocol):
    """Read access to contacts and their activity and enrichment history.

    Activities are returned newest first.
    """

    async def select_contacts_by_tenant_id(
        self,
        tenant_id: str,
        *,
        prospect_id: str | None = None,
    ) -> list[Contact]: ...

    async def select_contact_by_id(
        self, contact_id: str, tenant_id: str,
    ) -> Contact | None: ...

    async def select_activities_by_contact_id(
        self, contact_id: str, tenant_id: str, *, limit: int = 20,
    ) -> list[ContactActivity]: ...

    async def select_enrichments_by_contact_id(
        self, contact_id: str, tenant_id: str,
    ) -> list[ContactEnrichment]: ...
