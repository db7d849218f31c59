import pytest

from tracker.models.transaction import AMOUNT_MAX, UNCATEGORIZED

from conftest import API

TX = f"{API}/transactions"


async def _stats(client):
    resp = await client.get(TX)
    assert resp.status_code == 200
    return resp.json()["data"]["stats"]


class TestScenario:
    async def test_register_login_record_and_summarize(self, make_client):
        client = make_client()
        resp = await client.post(
            f"{API}/users/register",
            json={"username": "a", "email": "a@x.com", "password": "p"},
        )
        assert resp.status_code == 201

        resp = await client.post(f"{API}/users/login", json={"email": "a@x.com", "password": "p"})
        assert resp.status_code == 200
        assert "accessToken=" in resp.headers["set-cookie"]

        anonymous = make_client()
        assert (await anonymous.get(TX)).status_code == 401

        resp = await client.post(TX, json={"title": "Coffee", "amount": 50, "type": "expense"})
        assert resp.status_code == 201
        created = resp.json()["data"]
        assert created["category"] == UNCATEGORIZED
        assert created["note"] is None
        assert created["date"]

        resp = await client.get(TX)
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["stats"] == {"income": 0.0, "expense": 50.0, "balance": -50.0}
        assert [t["id"] for t in body["data"]["transactions"]] == [created["id"]]


class TestCreate:
    async def test_owner_stamped_from_principal(self, logged_in):
        client = await logged_in("alice")
        me = (await client.get(f"{API}/users/me")).json()["data"]
        resp = await client.post(TX, json={"title": "Salary", "amount": 1000, "type": "income"})
        assert resp.status_code == 201
        assert resp.json()["data"]["ownerId"] == me["id"]

    @pytest.mark.parametrize("field", ["owner", "ownerId", "owner_id", "id"])
    async def test_client_cannot_set_forbidden_fields(self, logged_in, field):
        client = await logged_in("alice")
        resp = await client.post(
            TX,
            json={"title": "Sneaky", "amount": 5, "type": "expense", field: "00000000-0000-0000-0000-000000000000"},
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    @pytest.mark.parametrize("amount", [0, -1, -0.01, "abc", None])
    async def test_non_positive_amount_rejected(self, logged_in, amount):
        client = await logged_in("alice")
        resp = await client.post(TX, json={"title": "Bad", "amount": amount, "type": "expense"})
        assert resp.status_code == 400

    async def test_smallest_positive_amount_accepted(self, logged_in):
        client = await logged_in("alice")
        resp = await client.post(TX, json={"title": "Gum", "amount": 0.01, "type": "expense"})
        assert resp.status_code == 201
        assert resp.json()["data"]["amount"] == 0.01

    @pytest.mark.parametrize("amount", [True, False, "50", [5]])
    async def test_amount_must_be_a_json_number(self, logged_in, amount):
        client = await logged_in("alice")
        resp = await client.post(TX, json={"title": "Bad", "amount": amount, "type": "income"})
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "amount"

    async def test_amount_is_capped_so_totals_stay_finite(self, logged_in):
        client = await logged_in("alice")
        resp = await client.post(TX, json={"title": "Huge", "amount": 1e308, "type": "income"})
        assert resp.status_code == 400

        for _ in range(2):
            resp = await client.post(TX, json={"title": "Big", "amount": AMOUNT_MAX, "type": "income"})
            assert resp.status_code == 201
        stats = await _stats(client)
        assert stats == {"income": 2 * AMOUNT_MAX, "expense": 0, "balance": 2 * AMOUNT_MAX}

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "   ", "amount": 5, "type": "expense"},
            {"amount": 5, "type": "expense"},
            {"title": "Thing", "amount": 5, "type": ""},
            {"title": "Thing", "amount": 5, "type": "gift"},
            {"title": "Thing", "amount": 5},
            {"title": "Thing", "amount": 5, "type": "expense", "note": "x" * 101},
        ],
    )
    async def test_invalid_payloads_rejected(self, logged_in, payload):
        client = await logged_in("alice")
        resp = await client.post(TX, json=payload)
        assert resp.status_code == 400
        assert resp.json()["errors"]

    async def test_optional_fields(self, logged_in):
        client = await logged_in("alice")
        resp = await client.post(
            TX,
            json={
                "title": "  Rent  ",
                "amount": 700,
                "type": "expense",
                "category": "rent",
                "note": "March",
                "date": "2024-03-01T09:30:00Z",
            },
        )
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["title"] == "Rent"
        assert data["category"] == "rent"
        assert data["note"] == "March"
        assert data["date"].startswith("2024-03-01T09:30:00")

    async def test_created_at_accepted_as_effective_date(self, logged_in):
        client = await logged_in("alice")
        resp = await client.post(
            TX, json={"title": "Lunch", "amount": 12, "type": "expense", "createdAt": "2024-05-01"}
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["date"].startswith("2024-05-01")

    async def test_blank_category_uses_sentinel(self, logged_in):
        client = await logged_in("alice")
        resp = await client.post(TX, json={"title": "Misc", "amount": 3, "type": "expense", "category": "  "})
        assert resp.json()["data"]["category"] == UNCATEGORIZED


class TestList:
    async def test_sorted_by_effective_date_descending(self, logged_in):
        client = await logged_in("alice")
        for day in ("2024-01-01", "2024-03-01", "2024-02-01"):
            await client.post(TX, json={"title": day, "amount": 1, "type": "expense", "date": day})

        titles = [t["title"] for t in (await client.get(TX)).json()["data"]["transactions"]]
        assert titles == ["2024-03-01", "2024-02-01", "2024-01-01"]

    async def test_only_own_transactions_listed(self, logged_in):
        alice = await logged_in("alice")
        bob = await logged_in("bob")
        await alice.post(TX, json={"title": "Alice pay", "amount": 100, "type": "income"})
        await bob.post(TX, json={"title": "Bob spend", "amount": 30, "type": "expense"})

        alice_data = (await alice.get(TX)).json()["data"]
        assert [t["title"] for t in alice_data["transactions"]] == ["Alice pay"]
        assert alice_data["stats"] == {"income": 100.0, "expense": 0.0, "balance": 100.0}

        bob_data = (await bob.get(TX)).json()["data"]
        assert [t["title"] for t in bob_data["transactions"]] == ["Bob spend"]

    async def test_income_round_trip_restores_stats(self, logged_in):
        client = await logged_in("alice")
        await client.post(TX, json={"title": "Snack", "amount": 7.5, "type": "expense"})
        before = await _stats(client)

        created = (await client.post(TX, json={"title": "Gift", "amount": 100, "type": "income"})).json()["data"]
        during = await _stats(client)
        assert during["income"] == before["income"] + 100
        assert during["balance"] == before["balance"] + 100
        assert during["expense"] == before["expense"]

        assert (await client.delete(f"{TX}/{created['id']}")).status_code == 200
        assert await _stats(client) == before


class TestOwnership:
    async def _alice_tx(self, logged_in):
        alice = await logged_in("alice")
        bob = await logged_in("bob")
        resp = await alice.post(TX, json={"title": "Private", "amount": 42, "type": "expense"})
        return alice, bob, resp.json()["data"]["id"]

    async def test_other_principal_cannot_read(self, logged_in):
        alice, bob, tx_id = await self._alice_tx(logged_in)
        resp = await bob.get(f"{TX}/{tx_id}")
        assert resp.status_code == 404
        assert "Private" not in resp.text

        resp = await alice.get(f"{TX}/{tx_id}")
        assert resp.status_code == 200
        assert resp.json()["data"]["title"] == "Private"

    async def test_other_principal_cannot_delete(self, logged_in):
        alice, bob, tx_id = await self._alice_tx(logged_in)
        resp = await bob.delete(f"{TX}/{tx_id}")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Transaction not found."}

        assert (await alice.get(f"{TX}/{tx_id}")).status_code == 200

    async def test_foreign_and_absent_are_indistinguishable(self, logged_in):
        alice, bob, tx_id = await self._alice_tx(logged_in)
        foreign = await bob.delete(f"{TX}/{tx_id}")
        absent = await bob.delete(f"{TX}/00000000-0000-0000-0000-000000000000")
        assert foreign.status_code == absent.status_code == 404
        assert foreign.json() == absent.json()

    async def test_delete_is_hard_and_not_repeatable(self, logged_in):
        alice, _, tx_id = await self._alice_tx(logged_in)
        resp = await alice.delete(f"{TX}/{tx_id}")
        assert resp.status_code == 200
        assert resp.json()["data"] == {}
        assert (await alice.delete(f"{TX}/{tx_id}")).status_code == 404
        assert (await alice.get(TX)).json()["data"]["transactions"] == []

    async def test_malformed_id_is_not_found(self, logged_in):
        client = await logged_in("alice")
        assert (await client.delete(f"{TX}/not-a-uuid")).status_code == 404
        assert (await client.get(f"{TX}/not-a-uuid")).status_code == 404
