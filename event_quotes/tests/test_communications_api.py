from datetime import date

import pytest


@pytest.mark.integration
@pytest.mark.admin
class TestCommunications:

    @pytest.mark.asyncio
    async def test_log_email_marks_quote_contacted(self, test_client, admin_headers, admin_user, quote_factory):
        quote = await quote_factory()
        resp = await test_client.post(f"/admin/quotes/{quote.id}/communications", headers=admin_headers, json={
            "communication_type": "email",
            "subject": "Your restroom quote",
            "message": "Thanks for reaching out!",
            "metadata": {"template_id": 3},
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["sent_by"] == admin_user.id
        assert body["subject"] == "Your restroom quote"
        assert body["status"] == "sent"
        assert body["metadata"] == {"template_id": 3}

        stored = await test_client.get(f"/admin/quotes/{quote.id}", headers=admin_headers)
        assert stored.json()["last_contacted_at"] is not None

    @pytest.mark.asyncio
    async def test_subject_dropped_for_non_email(self, test_client, admin_headers, quote_factory):
        quote = await quote_factory()
        resp = await test_client.post(f"/admin/quotes/{quote.id}/communications", headers=admin_headers, json={
            "communication_type": "phone",
            "subject": "ignored",
            "message": "Left voicemail",
        })
        assert resp.json()["subject"] is None

    @pytest.mark.asyncio
    async def test_list_and_timeline(self, test_client, admin_headers, quote_factory):
        quote = await quote_factory()
        for message in ("First call", "Second call"):
            await test_client.post(f"/admin/quotes/{quote.id}/communications", headers=admin_headers, json={
                "communication_type": "phone",
                "message": message,
            })

        listed = await test_client.get(f"/admin/quotes/{quote.id}/communications", headers=admin_headers)
        assert [c["message"] for c in listed.json()] == ["Second call", "First call"]

        timeline = await test_client.get(f"/admin/quotes/{quote.id}/timeline", headers=admin_headers)
        assert [e["type"] for e in timeline.json()] == ["communication", "communication"]

    @pytest.mark.asyncio
    async def test_unknown_quote(self, test_client, admin_headers):
        resp = await test_client.post("/admin/quotes/404/communications", headers=admin_headers, json={
            "communication_type": "note",
            "message": "hello",
        })
        assert resp.status_code == 404


@pytest.mark.integration
@pytest.mark.admin
class TestTemplates:

    template = {
        "name": "Follow up",
        "category": "quote_follow_up",
        "subject": "Your {event_type} on {event_date}",
        "body": "Hi {customer_name}, your quote is {quote_amount}. Balance due: {balance_due}.",
        "variables": ["customer_name", "quote_amount", "balance_due"],
    }

    @pytest.mark.asyncio
    async def test_only_super_admin_creates_templates(self, test_client, admin_headers):
        resp = await test_client.post("/admin/templates", headers=admin_headers, json=self.template)
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_create_list_and_render(self, test_client, super_admin_headers, quote_factory):
        created = await test_client.post("/admin/templates", headers=super_admin_headers, json=self.template)
        assert created.status_code == 200
        template_id = created.json()["id"]

        await test_client.post("/admin/templates", headers=super_admin_headers, json={
            **self.template, "name": "Retired", "is_active": False,
        })
        listed = await test_client.get("/admin/templates", headers=super_admin_headers)
        assert [t["name"] for t in listed.json()] == ["Follow up"]

        quote = await quote_factory(
            name="Jane Smith", event_type="Wedding", event_date=date(2030, 6, 5), deposit_amount=20000
        )
        rendered = await test_client.get(
            f"/admin/templates/{template_id}/render", params={"quote_id": quote.id}, headers=super_admin_headers
        )
        assert rendered.status_code == 200
        body = rendered.json()
        assert body["subject"] == "Your Wedding on Jun 5, 2030"
        assert body["body"] == "Hi Jane Smith, your quote is $995.00. Balance due: $795.00."

    @pytest.mark.asyncio
    async def test_render_unknown_template(self, test_client, admin_headers, quote_factory):
        quote = await quote_factory()
        resp = await test_client.get(
            "/admin/templates/77/render", params={"quote_id": quote.id}, headers=admin_headers
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Template with id 77 not found"
