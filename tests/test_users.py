from bizdesk.models.plan import SubscriptionPlan
from tests.conftest import ALICE, add_user, headers_for


def _new_user(client, headers, email="moussa@alpha.test", **overrides):
    data = {"email": email, "first_name": "Moussa", "last_name": "Sow"}
    data.update(overrides)
    return client.post("/api/users", headers=headers, json=data)


def _upgrade(db, tenant, plan=SubscriptionPlan.BASIC):
    tenant.plan = plan
    db.commit()


class TestListUsers:
    def test_admin_listed_after_signup(self, client, headers_a):
        response = client.get("/api/users", headers=headers_a)
        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["email"] for u in users] == [ALICE]
        assert users[0]["role"] == "admin"

    def test_me(self, client, headers_a):
        response = client.get("/api/users/me", headers=headers_a)
        assert response.json()["email"] == ALICE


class TestCreateUser:
    def test_free_plan_allows_only_one_user(self, client, headers_a):
        response = _new_user(client, headers_a)
        assert response.status_code == 403
        assert "free plan" in response.json()["detail"].lower()

    def test_basic_plan_allows_three_users(self, client, db_session, tenant_a, headers_a):
        tenant, _ = tenant_a
        _upgrade(db_session, tenant)

        assert _new_user(client, headers_a, "one@alpha.test").status_code == 201
        assert _new_user(client, headers_a, "two@alpha.test").status_code == 201
        assert _new_user(client, headers_a, "three@alpha.test").status_code == 403

    def test_enterprise_plan_is_unlimited(self, client, db_session, tenant_a, headers_a):
        tenant, _ = tenant_a
        _upgrade(db_session, tenant, SubscriptionPlan.ENTERPRISE)
        for i in range(12):
            assert _new_user(client, headers_a, f"user{i}@alpha.test").status_code == 201

    def test_new_user_defaults_to_user_role(self, client, db_session, tenant_a, headers_a):
        tenant, _ = tenant_a
        _upgrade(db_session, tenant)
        response = _new_user(client, headers_a, email="Moussa@Alpha.test")
        assert response.status_code == 201
        assert response.json()["role"] == "user"
        assert response.json()["email"] == "moussa@alpha.test"

    def test_email_unique_across_tenants(self, client, db_session, tenant_a, headers_a, headers_b):
        tenant, _ = tenant_a
        _upgrade(db_session, tenant)
        response = _new_user(client, headers_a, email="bob@beta.test")
        assert response.status_code == 400

    def test_regular_user_cannot_add_users(self, client, db_session, tenant_a):
        tenant, _ = tenant_a
        _upgrade(db_session, tenant, SubscriptionPlan.PREMIUM)
        add_user(db_session, tenant, "clerk@alpha.test")
        response = _new_user(client, headers_for("clerk@alpha.test"))
        assert response.status_code == 403

    def test_invalid_email_rejected(self, client, headers_a):
        assert _new_user(client, headers_a, email="not-an-email").status_code == 422


class TestUpdateUser:
    def test_admin_changes_role(self, client, db_session, tenant_a, headers_a):
        tenant, _ = tenant_a
        clerk = add_user(db_session, tenant, "clerk@alpha.test")
        response = client.patch(f"/api/users/{clerk.id}", headers=headers_a, json={"role": "admin"})
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    def test_cannot_change_own_role(self, client, context_a, headers_a):
        response = client.patch(
            f"/api/users/{context_a.user.id}", headers=headers_a, json={"role": "user"}
        )
        assert response.status_code == 403

    def test_user_edits_own_name(self, client, db_session, tenant_a):
        tenant, _ = tenant_a
        clerk = add_user(db_session, tenant, "clerk@alpha.test")
        response = client.patch(
            f"/api/users/{clerk.id}", headers=headers_for("clerk@alpha.test"), json={"first_name": "Fatou"}
        )
        assert response.status_code == 200
        assert response.json()["first_name"] == "Fatou"

    def test_user_cannot_promote_self(self, client, db_session, tenant_a):
        tenant, _ = tenant_a
        clerk = add_user(db_session, tenant, "clerk@alpha.test")
        response = client.patch(
            f"/api/users/{clerk.id}", headers=headers_for("clerk@alpha.test"), json={"role": "admin"}
        )
        assert response.status_code == 403

    def test_user_cannot_edit_others(self, client, db_session, tenant_a, context_a):
        tenant, _ = tenant_a
        add_user(db_session, tenant, "clerk@alpha.test")
        response = client.patch(
            f"/api/users/{context_a.user.id}",
            headers=headers_for("clerk@alpha.test"),
            json={"first_name": "Eve"},
        )
        assert response.status_code == 403


class TestDeactivateUser:
    def test_admin_deactivates_user(self, client, db_session, tenant_a, headers_a):
        tenant, _ = tenant_a
        clerk = add_user(db_session, tenant, "clerk@alpha.test")

        response = client.delete(f"/api/users/{clerk.id}", headers=headers_a)
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert client.get("/api/purchases", headers=headers_for("clerk@alpha.test")).status_code == 401

    def test_deactivation_frees_a_seat(self, client, db_session, tenant_a, headers_a):
        tenant, _ = tenant_a
        _upgrade(db_session, tenant)
        add_user(db_session, tenant, "one@alpha.test")
        two = add_user(db_session, tenant, "two@alpha.test")
        assert _new_user(client, headers_a).status_code == 403

        client.delete(f"/api/users/{two.id}", headers=headers_a)
        assert _new_user(client, headers_a).status_code == 201

    def test_cannot_deactivate_self(self, client, context_a, headers_a):
        response = client.delete(f"/api/users/{context_a.user.id}", headers=headers_a)
        assert response.status_code == 403

    def test_regular_user_cannot_deactivate(self, client, db_session, tenant_a, context_a):
        tenant, _ = tenant_a
        add_user(db_session, tenant, "clerk@alpha.test")
        response = client.delete(
            f"/api/users/{context_a.user.id}", headers=headers_for("clerk@alpha.test")
        )
        assert response.status_code == 403
