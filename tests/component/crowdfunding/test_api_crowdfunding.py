"""
Component Tests for the Crowdfunding API

Tests the HTTP adapter: header-based call context, routing and the
mapping of ledger failures to status codes.
"""

import pytest

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.crowdfunding_service.models import MAX_AMOUNT
from microservices.crowdfunding_service.routes_registry import API_PREFIX
from tests.contracts.crowdfunding.data_contract import BASE_TIME, ONE_DAY


@pytest.fixture
def owner_headers(factory, owner):
    return factory.make_headers(owner)


@pytest.fixture
def donor_headers(factory, donor):
    return factory.make_headers(donor)


@pytest.fixture
def campaign_id(client, factory, owner_headers):
    response = client.post(
        f"{API_PREFIX}/campaigns",
        json=factory.make_create_campaign_payload(),
        headers=owner_headers,
    )
    assert response.status_code == 200
    return response.json()["campaign_id"]


class TestHealthEndpoint:
    """Tests for GET /health"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "crowdfunding_service"


class TestBusinessEndpoints:
    """Tests for business endpoints"""

    def test_register_and_get(self, client, factory, owner, owner_headers):
        response = client.post(
            f"{API_PREFIX}/businesses",
            json=factory.make_register_business_payload(name="Acme"),
            headers=owner_headers,
        )
        assert response.status_code == 200
        business_id = response.json()["business_id"]

        response = client.get(f"{API_PREFIX}/businesses/{business_id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Acme"
        assert response.json()["owner"] == owner

    def test_blank_name_is_bad_request(self, client, factory, owner_headers):
        response = client.post(
            f"{API_PREFIX}/businesses",
            json=factory.make_register_business_payload(name=""),
            headers=owner_headers,
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "invalid_input"

    def test_missing_sender_header(self, client, factory):
        response = client.post(
            f"{API_PREFIX}/businesses",
            json=factory.make_register_business_payload(),
            headers={"X-Call-Time": str(BASE_TIME)},
        )
        assert response.status_code == 422

    def test_unknown_business(self, client):
        response = client.get(f"{API_PREFIX}/businesses/77")
        assert response.status_code == 404


class TestCampaignEndpoints:
    """Tests for campaign endpoints"""

    def test_get_campaign(self, client, campaign_id, owner_headers):
        response = client.get(f"{API_PREFIX}/campaigns/{campaign_id}", headers=owner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "active"
        assert data["raised_amount"] == 0
        assert len(data["reward_tiers"]) == 3

    def test_get_campaign_requires_call_time(self, client, campaign_id):
        response = client.get(f"{API_PREFIX}/campaigns/{campaign_id}")
        assert response.status_code == 422

    def test_zero_target_is_bad_request(self, client, factory, owner_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns",
            json=factory.make_create_campaign_payload(target_amount=0),
            headers=owner_headers,
        )
        assert response.status_code == 400

    def test_list_campaigns_by_status(self, client, factory, owner_headers):
        client.post(
            f"{API_PREFIX}/campaigns",
            json=factory.make_create_campaign_payload(),
            headers=owner_headers,
        )
        client.post(
            f"{API_PREFIX}/campaigns",
            json=factory.make_create_campaign_payload(
                start_date=BASE_TIME, end_date=BASE_TIME + ONE_DAY
            ),
            headers=owner_headers,
        )

        later = factory.make_headers("viewer", BASE_TIME + 2 * ONE_DAY)
        response = client.get(f"{API_PREFIX}/campaigns", params={"status": "expired"}, headers=later)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["campaigns"][0]["campaign_id"] == 2

    def test_list_campaigns_uses_configured_limit(self, client, service, factory, owner_headers):
        service.query_service.list_limit = 2
        for _ in range(3):
            client.post(
                f"{API_PREFIX}/campaigns",
                json=factory.make_create_campaign_payload(),
                headers=owner_headers,
            )

        response = client.get(f"{API_PREFIX}/campaigns", headers=owner_headers)

        data = response.json()
        assert data["total"] == 3
        assert [c["campaign_id"] for c in data["campaigns"]] == [1, 2]

        response = client.get(f"{API_PREFIX}/campaigns", params={"limit": 3}, headers=owner_headers)
        assert len(response.json()["campaigns"]) == 3

    def test_progress_by_non_owner_is_forbidden(self, client, campaign_id, donor_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/progress",
            json={"progress_report": "Not mine"},
            headers=donor_headers,
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "unauthorized"

    def test_progress_by_owner(self, client, campaign_id, owner_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/progress",
            json={"progress_report": "Pump installed"},
            headers=owner_headers,
        )
        assert response.status_code == 200

        campaign = client.get(f"{API_PREFIX}/campaigns/{campaign_id}", headers=owner_headers).json()
        assert campaign["progress_reports"] == ["Pump installed"]


class TestDonationEndpoints:
    """Tests for donation endpoints"""

    def test_donate(self, client, factory, campaign_id, donor_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/donations",
            json=factory.make_donate_payload(amount=600),
            headers=donor_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["new_raised_amount"] == 600
        assert data["status"] == "active"
        assert data["newly_unlocked_reward_ids"] == [1, 2]

    def test_donate_to_missing_campaign(self, client, factory, donor_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/999/donations",
            json=factory.make_donate_payload(),
            headers=donor_headers,
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "not_found"

    def test_zero_donation_is_bad_request(self, client, factory, campaign_id, donor_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/donations",
            json=factory.make_donate_payload(amount=0),
            headers=donor_headers,
        )
        assert response.status_code == 400

    def test_donation_to_completed_campaign_conflicts(self, client, factory, campaign_id, donor_headers):
        url = f"{API_PREFIX}/campaigns/{campaign_id}/donations"
        client.post(url, json=factory.make_donate_payload(amount=1000), headers=donor_headers)

        response = client.post(url, json=factory.make_donate_payload(amount=1), headers=donor_headers)

        assert response.status_code == 409
        assert response.json()["error_code"] == "invalid_state"

    def test_overflow_is_unprocessable(self, client, factory, campaign_id, donor_headers):
        url = f"{API_PREFIX}/campaigns/{campaign_id}/donations"
        client.post(url, json=factory.make_donate_payload(amount=MAX_AMOUNT), headers=donor_headers)

        response = client.post(url, json=factory.make_donate_payload(amount=1), headers=donor_headers)

        assert response.status_code == 422
        assert response.json()["error_code"] == "overflow"

    def test_list_donations_and_recurring(self, client, factory, campaign_id, donor, donor_headers):
        url = f"{API_PREFIX}/campaigns/{campaign_id}/donations"
        client.post(url, json=factory.make_donate_payload(amount=10, recurring=True), headers=donor_headers)
        client.post(url, json=factory.make_donate_payload(amount=20), headers=donor_headers)

        response = client.get(url)
        assert response.status_code == 200
        assert [d["amount"] for d in response.json()["donations"]] == [10, 20]

        response = client.get(f"{API_PREFIX}/donors/{donor}/recurring")
        assert response.json()["campaign_ids"] == [campaign_id]


class TestRewardEndpoints:
    """Tests for reward endpoints"""

    def test_claim_flow(self, client, factory, campaign_id, donor_headers):
        client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/donations",
            json=factory.make_donate_payload(amount=150),
            headers=donor_headers,
        )
        claim_url = f"{API_PREFIX}/campaigns/{campaign_id}/rewards/1/claim"

        claimable = client.get(
            f"{API_PREFIX}/campaigns/{campaign_id}/rewards/claimable", headers=donor_headers
        )
        assert [r["id"] for r in claimable.json()["rewards"]] == [1]

        assert client.post(claim_url, headers=donor_headers).status_code == 200

        repeat = client.post(claim_url, headers=donor_headers)
        assert repeat.status_code == 409
        assert repeat.json()["error_code"] == "already_claimed"

    def test_ineligible_claim(self, client, campaign_id, donor_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/rewards/2/claim", headers=donor_headers
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "ineligible"

    def test_unknown_reward(self, client, campaign_id, donor_headers):
        response = client.post(
            f"{API_PREFIX}/campaigns/{campaign_id}/rewards/9/claim", headers=donor_headers
        )
        assert response.status_code == 404
