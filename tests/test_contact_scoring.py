"""Tests for contact data-quality, role, engagement and enrichment scoring."""

from __future__ import annotations

import pytest
from conftest import NOW, TENANT, days_ago, make_activity, make_contact, make_enrichment

from sales_intel.data import CommitteeRole, EnrichmentStatus, InMemoryRepository
from sales_intel.errors import NotFoundError, SalesIntelError
from sales_intel.scoring import (
    ROLE_SCORES,
    ContactScore,
    calculate_contact_score,
    score_contact,
    score_contact_data,
    score_contact_role,
)
from sales_intel.telemetry import InMemoryTelemetrySink


def _complete_contact(**overrides):
    fields = {
        "email": "dana@acme.example",
        "email_verified": True,
        "phone": "+1 555 0100",
        "department": "EHS",
        "linkedin_url": "https://linkedin.com/in/dana",
        "role": CommitteeRole.DECISION_MAKER,
    }
    fields.update(overrides)
    return make_contact("c1", "Compliance Manager", **fields)


class TestDataQuality:
    def test_title_and_company_only(self):
        assert score_contact_data(make_contact("c1", "CFO")) == 8

    def test_nothing_filled_in(self):
        assert score_contact_data(make_contact("c1", None, company=None)) == 0

    def test_unverified_email(self):
        contact = make_contact("c1", "CFO", email="pat@acme.example")
        assert score_contact_data(contact) == 18

    def test_capped_at_25(self):
        assert score_contact_data(_complete_contact()) == 25


class TestRoleFit:
    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            (CommitteeRole.DECISION_MAKER, 25),
            (CommitteeRole.ECONOMIC_BUYER, 22),
            (CommitteeRole.EXECUTIVE_SPONSOR, 22),
            (CommitteeRole.CHAMPION, 20),
            (CommitteeRole.INFLUENCER, 15),
            (CommitteeRole.TECHNICAL_EVALUATOR, 12),
            (CommitteeRole.GATEKEEPER, 8),
            (CommitteeRole.END_USER, 5),
            (CommitteeRole.UNKNOWN, 3),
        ],
    )
    def test_role_table(self, role, expected):
        assert score_contact_role(make_contact("c1", "CFO", role=role)) == expected

    def test_every_role_has_a_score(self):
        assert set(ROLE_SCORES) == set(CommitteeRole)

    def test_recorded_role_not_title(self):
        # The title would suggest an economic buyer; only the recorded role counts.
        assert score_contact_role(make_contact("c1", "CEO")) == 3


class TestScoreContact:
    def test_recent_activity_window_is_strict(self):
        activities = [
            make_activity(created_at=days_ago(1)),
            make_activity(created_at=days_ago(29.9)),
            make_activity(created_at=days_ago(30)),
            make_activity(created_at=days_ago(45)),
        ]
        score = score_contact(make_contact("c1", "CFO"), activities, now=NOW)
        assert score.engagement == 10

    def test_engagement_capped(self):
        activities = [make_activity(created_at=days_ago(i)) for i in range(7)]
        assert score_contact(make_contact("c1", "CFO"), activities, now=NOW).engagement == 25

    def test_naive_timestamps_are_utc(self):
        naive = days_ago(2).replace(tzinfo=None)
        score = score_contact(make_contact("c1", "CFO"), [make_activity(created_at=naive)], now=NOW)
        assert score.engagement == 5

    def test_only_completed_enrichments_count(self):
        enrichments = [
            make_enrichment(source_type="apollo"),
            make_enrichment(source_type="zoominfo"),
            make_enrichment(source_type="clearbit", status=EnrichmentStatus.FAILED),
            make_enrichment(source_type="manual", status=EnrichmentStatus.PARTIAL),
        ]
        score = score_contact(make_contact("c1", "CFO"), enrichments=enrichments, now=NOW)
        assert score.enrichment_depth == 16

    def test_enrichment_capped(self):
        enrichments = [make_enrichment(source_type=f"src{i}") for i in range(4)]
        assert score_contact(make_contact("c1", "CFO"), enrichments=enrichments).enrichment_depth == 25

    def test_total_is_sum(self):
        score = score_contact(
            make_contact("c1", "CFO", role=CommitteeRole.CHAMPION),
            [make_activity()],
            [make_enrichment()],
            now=NOW,
        )
        assert score == ContactScore(
            data_quality=8, role_fit=20, engagement=5, enrichment_depth=8, total=41,
        )

    def test_maximum(self):
        score = score_contact(
            _complete_contact(),
            [make_activity(created_at=days_ago(i)) for i in range(5)],
            [make_enrichment(source_type=f"src{i}") for i in range(4)],
            now=NOW,
        )
        assert score.total == 100


class TestCalculateContactScore:
    @pytest.mark.asyncio
    async def test_reads_from_repository(self, repo: InMemoryRepository):
        repo.add_contact(make_contact("c1", "CFO", role=CommitteeRole.ECONOMIC_BUYER))
        repo.add_activity(make_activity("c1", created_at=days_ago(3)))
        repo.add_activity(make_activity("c2", created_at=days_ago(3)))
        repo.add_enrichment(make_enrichment("c1"))
        sink = InMemoryTelemetrySink()

        score = await calculate_contact_score(repo, TENANT, "c1", now=NOW, telemetry=sink)

        assert (score.role_fit, score.engagement, score.enrichment_depth) == (22, 5, 8)
        assert score.total == 43
        [event] = sink.named("contacts.scored")
        assert event.attributes["activities"] == 1
        assert event.attributes["total"] == 43

    @pytest.mark.asyncio
    async def test_missing_contact(self, repo: InMemoryRepository):
        sink = InMemoryTelemetrySink()
        with pytest.raises(NotFoundError, match="c404"):
            await calculate_contact_score(repo, TENANT, "c404", telemetry=sink)
        assert sink.events == []

    @pytest.mark.asyncio
    async def test_other_tenant_is_not_found(self, repo: InMemoryRepository):
        repo.add_contact(make_contact("c1", "CFO", tenant_id="other"))
        with pytest.raises(SalesIntelError):
            await calculate_contact_score(repo, TENANT, "c1")

    def test_not_found_is_a_lookup_error(self):
        assert issubclass(NotFoundError, LookupError)
