from sales_intel.data.loader import load_dataset, read_mapping
from sales_intel.data.memory import InMemoryRepository
from sales_intel.data.models import (
    CommitteeRole,
    Contact,
    ContactActivity,
    ContactActivityType,
    ContactEnrichment,
    ContactStatus,
    EnrichmentStatus,
    Prospect,
    ProspectSignal,
    ProspectStatus,
    SignalType,
)
from sales_intel.data.repository import ContactRepository, ProspectRepository

__all__ = [
    "CommitteeRole",
    "Contact",
    "ContactActivity",
    "ContactActivityType",
    "ContactEnrichment",
    "ContactRepository",
    "ContactStatus",
    "EnrichmentStatus",
    "InMemoryRepository",
    "Prospect",
    "ProspectRepository",
    "ProspectSignal",
    "ProspectStatus",
    "SignalType",
    "load_dataset",
    "read_mapping",
]
