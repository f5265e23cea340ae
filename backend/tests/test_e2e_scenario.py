"""
Prospection - Scénario complet
Admin enregistre un vendeur -> OTP -> formulaire -> tableau admin.
Run: pytest backend/tests/test_e2e_scenario.py -v
"""

from tests.conftest import auth_h


class TestFullFlow:

    async def test_register_login_submit_list(self, client, db, admin_headers):
        phone = "123456789"

        # 1. Admin enregistre le vendeur
        r = await client.post("/api/admin/users", json={"phone": phone, "name": "Doe", "surname": "John"},
                              headers=admin_headers)
        assert r.status_code == 201

        # 2. Demande de code
        r = await client.post("/api/auth/request-otp", json={"phone": phone})
        assert r.status_code == 200
        code = (await db.otps.find_one({"phone": phone}))["code"]

        # 3. Vérification
        r = await client.post("/api/auth/verify-otp", json={"phone": phone, "code": code})
        assert r.status_code == 200
        token = r.json()["token"]

        # 4. Formulaire
        form = {"zone": "A", "immeuble": "1", "nomClient": "Client Test", "numContact": "987654321"}
        r = await client.post("/api/profile", json=form, headers=auth_h(token))
        assert r.status_code == 200
        user = r.json()["user"]
        assert user["phone"] == phone
        assert user["nom"] == "Doe"
        assert user["prenom"] == "John"
        for key, value in form.items():
            assert user[key] == value

        # 5. Tableau admin
        r = await client.get("/api/admin/users", headers=admin_headers)
        listed = next(u for u in r.json()["users"] if u["phone"] == phone)
        assert listed["zone"] == "A"
        assert "resultatProspection" not in listed

        # 6. Le profil relu est identique
        r = await client.get("/api/profile", headers=auth_h(token))
        assert r.json()["user"]["nomClient"] == "Client Test"

    async def test_root(self, client):
        r = await client.get("/")
        assert r.status_code == 200
        assert r.json()["status"] == "running"
