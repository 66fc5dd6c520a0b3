# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for center transaction endpoints."""

import pytest

from lscmis.infrastructure.store import Collection

CENTERS = "/api/v1/centers"


@pytest.fixture
def center(store, org):
    center = store.seed(Collection.CENTERS, name="Kendra", status="APPROVED", is_active=True)
    store.seed(Collection.CENTER_SERVICES, lsc_id=center.id, service_item_id=org["item_a"].id)
    return center


def payload(item_id, start="2025-03-01", **overrides):
    body = {
        "service_item_id": item_id,
        "service_start_date": start,
        "beneficiary_name": "Ramesh Oraon",
        "amount_collected": "30.00",
    }
    body.update(overrides)
    return body


class TestTransactionsAPI:
    def test_record_list_delete(self, client, center, org):
        url = f"{CENTERS}/{center.id}/transactions"

        recorded = client.post(url, json=payload(org["item_a"].id))
        assert recorded.status_code == 200
        transaction_id = recorded.json()["id"]

        client.post(url, json=payload(org["item_a"].id, start="2025-04-15"))
        march = client.get(url, params={"from": "2025-03-01", "to": "2025-03-31"})
        assert [t["id"] for t in march.json()] == [transaction_id]

        deleted = client.delete(f"{url}/{transaction_id}")
        assert deleted.status_code == 200
        assert len(client.get(url).json()) == 1

    def test_service_not_offered(self, client, center, org):
        response = client.post(
            f"{CENTERS}/{center.id}/transactions", json=payload(org["item_b"].id)
        )

        assert response.status_code == 400
        assert response.json() == {"error": "This service is not offered by the center"}

    def test_malformed_date(self, client, center, org):
        response = client.post(
            f"{CENTERS}/{center.id}/transactions",
            json=payload(org["item_a"].id, start="yesterday"),
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request: service_start_date")

    def test_unknown_center(self, client, org):
        response = client.post(
            f"{CENTERS}/missing/transactions", json=payload(org["item_a"].id)
        )

        assert response.status_code == 404

    def test_delete_unknown_transaction(self, client, center):
        response = client.delete(f"{CENTERS}/{center.id}/transactions/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Transaction not found"}
