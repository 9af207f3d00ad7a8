"""Tests for the tax computation endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
class TestFederalEndpoint:
    """POST /api/tax/federal."""

    async def test_wages_only_refund(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal",
            json={"filing_status": "single", "wages": 40000, "withholding": 3000},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tax_year"] == 2025
        assert data["filing_status"] == "single"
        assert data["taxable_income"] == 24250.0
        assert data["income_tax"] == 2671.5
        assert data["marginal_rate"] == 0.12
        assert data["refund_or_owed"] == 328.5
        assert data["is_refund"] is True
        assert data["eitc"]["reason"] == "phased_out"

    async def test_request_id_echoed(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal",
            json={"wages": 40000},
            headers={"X-Request-ID": "intake-42"},
        )

        assert response.headers["X-Request-ID"] == "intake-42"

    async def test_request_id_generated(self, api_client: AsyncClient) -> None:
        response = await api_client.post("/api/tax/federal", json={})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"]

    async def test_surviving_spouse_unprocessable(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal", json={"filing_status": "qw", "wages": 50000}
        )

        assert response.status_code == 422
        assert "qw" in response.json()["detail"]

    async def test_w2_rows_are_summed(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal",
            json={
                "filing_status": "single",
                "wages": 999999,
                "withholding": 999999,
                "w2s": [
                    {"employer_name": "Acme", "wages": 30000, "federal_withholding": 2000},
                    {"employer_name": "Globex", "wages": "10000", "federal_withholding": 1000},
                ],
                "additional_withholding": 500,
            },
        )

        data = response.json()
        assert data["total_income"] == 40000.0
        assert data["withholding"] == 3500.0
        assert data["refund_or_owed"] == 828.5

    async def test_loose_inputs_are_clamped(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal",
            json={
                "filing_status": "Head_Of_Household",
                "wages": "-500",
                "self_employment_profit": "abc",
                "withholding": "1,000",
                "qualifying_children_under_17": "2.9",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["filing_status"] == "hoh"
        assert data["qualifying_children_under_17"] == 2
        assert data["total_income"] == 0.0
        assert data["eitc"]["reason"] == "no_earned_income"
        assert data["refund_or_owed"] == 1000.0

    async def test_huge_exponents_are_clamped(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal",
            json={
                "wages": "1e1000001",
                "withholding": 3000,
                "qualifying_children_under_17": "1e1000001",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_income"] == 0.0
        assert data["qualifying_children_under_17"] == 0
        assert data["refund_or_owed"] == 3000.0

    async def test_eligibility_flags(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/federal",
            json={
                "filing_status": "mfs",
                "wages": 28000,
                "qualifying_children_under_17": 2,
                "is_separated_spouse_for_eitc": True,
            },
        )

        data = response.json()
        assert data["eitc"]["eligible"] is True
        assert data["eitc"]["amount"] == 6173.0


@pytest.mark.asyncio
class TestQuickEstimateEndpoint:
    """POST /api/tax/quick-estimate."""

    async def test_estimate_is_not_final(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/quick-estimate",
            json={
                "filing_status": "single",
                "wages": 30000,
                "qualifying_children_under_17": 2,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_final"] is False
        assert data["disclaimer"]
        assert data["estimated_refund_or_owed"] == 6504.5

    async def test_surviving_spouse_unprocessable(self, api_client: AsyncClient) -> None:
        response = await api_client.post(
            "/api/tax/quick-estimate", json={"filing_status": "qw"}
        )

        assert response.status_code == 422
