import pytest
from razorpay.errors import BadRequestError

from app.api.routes import bookings as booking_routes
from app.api.routes import refund_requests as refund_routes

from tests.conftest import CHECK_IN, CHECK_OUT


def booking_payload(room_id, **overrides):
    payload = {
        "room_id": room_id,
        "guest": {"customer_name": "Asha Patil", "customer_email": "asha@example.com"},
        "stay": {
            "check_in_date": CHECK_IN.isoformat(),
            "check_out_date": CHECK_OUT.isoformat(),
            "guests": 2,
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def paid_gateway(monkeypatch):
    monkeypatch.setattr(booking_routes, "create_order", lambda booking_id, amount: {"id": "order_1"})
    monkeypatch.setattr(booking_routes, "verify_signature", lambda order_id, payment_id, signature: True)


class TestAuthRoutes:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "Backend running successfully"}

    def test_register_login_logout(self, client):
        creds = {"name": "Manager", "email": "manager@theroyalpavilion.in", "password": "pa55word"}

        assert client.post("/auth/admin/register", json=creds).status_code == 200
        assert client.post("/auth/admin/register", json=creds).status_code == 400

        login = client.post("/auth/admin/login", json={"email": creds["email"], "password": "pa55word"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        me = client.get("/auth/me", headers=headers)
        assert me.json()["email"] == creds["email"]

        logout = client.post("/auth/admin/logout", headers=headers)
        assert logout.json()["authenticated"] is False

    def test_bad_password(self, client, admin):
        response = client.post("/auth/admin/login", json={"email": admin.email, "password": "nope"})
        assert response.status_code == 401

    def test_admin_routes_need_token(self, client):
        assert client.get("/auth/me").status_code == 401
        assert client.post("/rooms/", json={"name": "X", "description": "", "price": 100}).status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401


class TestRoomRoutes:
    def test_create_and_quote(self, client, admin_headers):
        created = client.post("/rooms/", headers=admin_headers, json={
            "name": "Deluxe 201",
            "description": "Queen bed",
            "price": 2000,
            "category_type": "Royal Deluxe",
        })
        assert created.status_code == 200
        room = created.json()
        assert room["price_per_night"] == 2000

        quote = client.post(f"/rooms/{room['id']}/quote", json={
            "check_in_date": "2030-03-10",
            "check_out_date": "2030-03-12",
            "adults": 2,
        })

        assert quote.status_code == 200
        assert quote.json()["extra_guests"] == 1
        assert quote.json()["total"] == 2000 * 2 + 600 * 2

    def test_quote_rejects_reversed_dates(self, client, room):
        response = client.post(f"/rooms/{room.id}/quote", json={
            "check_in_date": "2030-03-12",
            "check_out_date": "2030-03-10",
            "adults": 2,
        })
        assert response.status_code == 400

    def test_available_rooms(self, client, room, make_booking):
        make_booking(room)

        busy = client.get("/rooms/available", params={"check_in": "2030-03-11", "check_out": "2030-03-12"})
        free = client.get("/rooms/available", params={"check_in": "2030-03-13", "check_out": "2030-03-14"})

        assert busy.json() == []
        assert [r["id"] for r in free.json()] == [room.id]

    def test_unknown_room(self, client):
        assert client.get("/rooms/missing").status_code == 404


class TestBookingRoutes:
    def test_create_and_verify_payment(self, client, room, paid_gateway):
        created = client.post("/bookings/", json=booking_payload(room.id, create_payment_order=True))
        assert created.status_code == 200
        body = created.json()
        assert body["razorpay_order_id"] == "order_1"
        booking_id = body["booking"]["id"]

        verified = client.post(f"/bookings/{booking_id}/verify-payment", json={
            "razorpay_payment_id": "pay_1",
            "razorpay_order_id": "order_1",
            "razorpay_signature": "sig",
        })

        assert verified.status_code == 200
        assert verified.json()["booking"]["status"] == "confirmed"
        assert verified.json()["booking"]["payment_status"] == "paid"

    def test_bad_signature_marks_payment_failed(self, client, room, admin_headers, paid_gateway, monkeypatch):
        monkeypatch.setattr(booking_routes, "verify_signature", lambda *args: False)
        created = client.post("/bookings/", json=booking_payload(room.id, create_payment_order=True))
        booking_id = created.json()["booking"]["id"]

        response = client.post(f"/bookings/{booking_id}/verify-payment", json={
            "razorpay_payment_id": "pay_1",
            "razorpay_order_id": "order_1",
            "razorpay_signature": "forged",
        })

        assert response.status_code == 400
        booking = client.get(f"/bookings/{booking_id}", headers=admin_headers).json()
        assert booking["payment_status"] == "failed"
        assert booking["status"] == "pending"

    def test_verify_requires_stored_order(self, client, room, admin_headers, paid_gateway):
        booking_id = client.post("/bookings/", json=booking_payload(room.id)).json()["booking"]["id"]

        response = client.post(f"/bookings/{booking_id}/verify-payment", json={
            "razorpay_payment_id": "pay_cheap",
            "razorpay_order_id": "order_other",
            "razorpay_signature": "valid-for-other-order",
        })

        assert response.status_code == 400
        booking = client.get(f"/bookings/{booking_id}", headers=admin_headers).json()
        assert booking["status"] == "pending"
        assert booking["payment_status"] == "pending"

    def test_verify_rejects_other_order(self, client, room, paid_gateway):
        created = client.post("/bookings/", json=booking_payload(room.id, create_payment_order=True))
        booking_id = created.json()["booking"]["id"]

        response = client.post(f"/bookings/{booking_id}/verify-payment", json={
            "razorpay_payment_id": "pay_cheap",
            "razorpay_order_id": "order_other",
            "razorpay_signature": "sig",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Order does not match this booking"

    def test_guest_cannot_self_declare_payment(self, client, room):
        payload = booking_payload(
            room.id,
            booking_type="offline",
            payment={"payment_status": "paid", "payment_id": "cash-1"},
        )

        booking = client.post("/bookings/", json=payload).json()["booking"]

        assert booking["payment_status"] == "pending"
        assert booking["booking_type"] == "online"
        assert booking["payment_id"] is None
        response = client.post("/receipts/from-booking", json={"booking_id": booking["id"], "include_qr_code": False})
        assert response.status_code == 400

    def test_front_desk_records_offline_payment(self, client, room, admin_headers):
        payload = booking_payload(
            room.id,
            booking_type="offline",
            payment={"payment_status": "paid", "payment_id": "cash-1"},
        )

        booking = client.post("/bookings/", headers=admin_headers, json=payload).json()["booking"]

        assert booking["payment_status"] == "paid"
        assert booking["booking_type"] == "offline"

    def test_double_booking_is_conflict(self, client, room):
        assert client.post("/bookings/", json=booking_payload(room.id)).status_code == 200

        response = client.post("/bookings/", json=booking_payload(room.id))

        assert response.status_code == 409
        assert response.json() == {"detail": "Room is not available for the selected dates"}

    def test_missing_guest_email_rejected(self, client, room):
        payload = booking_payload(room.id, guest={"customer_name": "Asha"})
        assert client.post("/bookings/", json=payload).status_code == 422

    def test_invalid_promo(self, client, room):
        response = client.post("/bookings/", json=booking_payload(room.id, promo={"code": "GHOST"}))
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid promo code"

    def test_admin_status_flow(self, client, room, admin_headers):
        booking_id = client.post("/bookings/", json=booking_payload(room.id)).json()["booking"]["id"]

        bad = client.patch(f"/bookings/{booking_id}/status", headers=admin_headers, json={"status": "checked_out"})
        assert bad.status_code == 400

        ok = client.patch(f"/bookings/{booking_id}/status", headers=admin_headers, json={"status": "confirmed"})
        assert ok.json()["status"] == "confirmed"

        listed = client.get("/bookings/", headers=admin_headers, params={"status": "confirmed"})
        assert [b["id"] for b in listed.json()] == [booking_id]

    def test_checkout_and_delete(self, client, room, admin_headers):
        booking_id = client.post("/bookings/", json=booking_payload(room.id)).json()["booking"]["id"]
        client.post(f"/bookings/{booking_id}/confirm-payment", headers=admin_headers, params={"payment_id": "cash-1"})

        checkout = client.post(f"/bookings/{booking_id}/checkout", headers=admin_headers, params={"room_id": room.id})
        assert checkout.json()["status"] == "checked_out"

        assert client.delete(f"/bookings/{booking_id}", headers=admin_headers).status_code == 200
        assert client.get(f"/bookings/{booking_id}", headers=admin_headers).status_code == 404

    def test_not_found_is_mapped(self, client, admin_headers):
        response = client.get("/bookings/missing", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"detail": "Booking not found"}


class TestAvailabilityRoutes:
    def test_bulk_update_end_date_is_inclusive(self, client, room, admin_headers):
        response = client.post("/availability/bulk-update", headers=admin_headers, json={
            "room_ids": [room.id],
            "start_date": "2030-04-01",
            "end_date": "2030-04-02",
            "status": "maintenance",
        })
        assert response.json()["updated"] == 2

        calendar = client.get(f"/availability/rooms/{room.id}/calendar",
                              params={"start_date": "2030-04-01", "end_date": "2030-04-04"}).json()
        assert [d["status"] for d in calendar] == ["maintenance", "maintenance", "available"]

        check = client.get(f"/availability/rooms/{room.id}/check",
                           params={"check_in": "2030-04-02", "check_out": "2030-04-03"})
        assert check.json()["available"] is False

    def test_display_label(self, client, room, make_booking):
        make_booking(room)
        response = client.get(f"/availability/rooms/{room.id}/status",
                              params={"start_date": CHECK_IN.isoformat(), "end_date": CHECK_OUT.isoformat()})
        assert response.json()["status"] == "online-booking"
        assert response.json()["label"] == "booked"

    def test_empty_range_rejected(self, client, room):
        response = client.get(f"/availability/rooms/{room.id}/check",
                              params={"check_in": "2030-04-02", "check_out": "2030-04-02"})
        assert response.status_code == 400


class TestReceiptAndPromoRoutes:
    def test_receipt_from_booking(self, client, room, admin_headers):
        booking_id = client.post("/bookings/", json=booking_payload(room.id)).json()["booking"]["id"]
        client.post(f"/bookings/{booking_id}/confirm-payment", headers=admin_headers, params={"payment_id": "pay_9"})

        created = client.post("/receipts/from-booking", json={"booking_id": booking_id, "include_qr_code": False})
        again = client.post("/receipts/from-booking", json={"booking_id": booking_id, "include_qr_code": False})

        assert created.status_code == 200
        assert again.json()["id"] == created.json()["id"]
        assert created.json()["data"]["total"] == 9000

        fetched = client.get(f"/receipts/{booking_id}")
        assert fetched.json()["receipt_number"] == created.json()["receipt_number"]

        html = client.get(f"/receipts/{booking_id}/html")
        assert html.headers["content-type"].startswith("text/html")
        assert "BOOKING RECEIPT" in html.text

    def test_explicit_amount_receipts_are_admin_only(self, client, room, admin_headers, paid_gateway):
        created = client.post("/bookings/", json=booking_payload(room.id, create_payment_order=True))
        booking = created.json()["booking"]
        forged = {
            "booking_id": booking["id"],
            "customer_name": booking["customer_name"],
            "customer_email": booking["customer_email"],
            "room_id": room.id,
            "room_name": room.name,
            "check_in_date": booking["check_in_date"],
            "check_out_date": booking["check_out_date"],
            "guests": booking["guests"],
            "price": 1.0,
            "payment_id": "pay_1",
            "payment_method": "Razorpay",
        }

        assert client.post("/receipts/", json=forged).status_code == 401

        client.post(f"/bookings/{booking['id']}/verify-payment", json={
            "razorpay_payment_id": "pay_1",
            "razorpay_order_id": "order_1",
            "razorpay_signature": "sig",
        })
        receipt = client.post("/receipts/from-booking", json={"booking_id": booking["id"], "include_qr_code": False})

        stored = client.get(f"/bookings/{booking['id']}", headers=admin_headers).json()
        assert receipt.json()["data"]["total"] == stored["total_price"] == 9000

    def test_missing_receipt(self, client):
        assert client.get("/receipts/missing").status_code == 404

    def test_promo_lifecycle(self, client, admin_headers):
        created = client.post("/promo-codes/", headers=admin_headers, json={"code": "rain", "discount_amount": 250})
        assert created.json()["code"] == "RAIN"

        valid = client.post("/promo-codes/validate", json={"promo_code": "RAIN", "total_amount": 1000})
        assert valid.json()["valid"] is True
        assert valid.json()["final_amount"] == 750

        listed = client.get("/promo-codes/", headers=admin_headers).json()
        assert [p["code"] for p in listed] == ["RAIN"]

        assert client.delete(f"/promo-codes/{created.json()['id']}", headers=admin_headers).status_code == 200
        invalid = client.post("/promo-codes/validate", json={"promo_code": "RAIN", "total_amount": 1000})
        assert invalid.json()["valid"] is False


class TestAnalyticsRoutes:
    def test_revenue_counts_paid_bookings_only(self, client, room, admin_headers, make_booking):
        paid = make_booking(room)
        make_booking(room, check_in=CHECK_OUT, check_out=CHECK_OUT.replace(day=CHECK_OUT.day + 1))
        client.post(f"/bookings/{paid.id}/confirm-payment", headers=admin_headers, params={"payment_id": "pay_1"})

        total = client.get("/admin-analytics/revenue/total", headers=admin_headers)
        per_room = client.get("/admin-analytics/revenue/rooms", headers=admin_headers)
        counts = client.get("/admin-analytics/bookings/room-count", headers=admin_headers)

        assert total.json() == {"total_revenue": 9000.0}
        assert per_room.json()[0]["revenue"] == 9000.0
        assert counts.json()[0]["booking_count"] == 2


class TestRefundRoutes:
    def paid_booking_id(self, client, room):
        created = client.post("/bookings/", json=booking_payload(room.id, create_payment_order=True))
        booking_id = created.json()["booking"]["id"]
        client.post(f"/bookings/{booking_id}/verify-payment", json={
            "razorpay_payment_id": "pay_1",
            "razorpay_order_id": "order_1",
            "razorpay_signature": "sig",
        })
        return booking_id

    def request_refund(self, client, booking_id):
        return client.post("/refund-requests/", json={
            "booking_id": booking_id,
            "customer_name": "Asha Patil",
            "customer_email": "asha@example.com",
            "amount": 9000,
            "reason": "Family emergency, trip cancelled",
        })

    def test_approval_refunds_through_gateway(self, client, room, admin_headers, paid_gateway, monkeypatch):
        calls = []
        monkeypatch.setattr(refund_routes, "refund_payment",
                            lambda payment_id, amount: calls.append((payment_id, amount)) or
                            {"id": "rfnd_9", "status": "processed"})
        booking_id = self.paid_booking_id(client, room)
        request = self.request_refund(client, booking_id).json()

        assert client.get("/refund-requests/").status_code == 401

        approved = client.post(f"/refund-requests/{request['id']}/approve", headers=admin_headers,
                               json={"admin_notes": "Approved"})

        assert approved.status_code == 200
        assert approved.json()["status"] == "refund_initiated"
        assert approved.json()["refund_id"] == "rfnd_9"
        assert calls == [("pay_1", 9000)]
        booking = client.get(f"/bookings/{booking_id}", headers=admin_headers).json()
        assert booking["payment_status"] == "refunded"

    def test_gateway_failure_is_recorded(self, client, room, admin_headers, paid_gateway, monkeypatch):
        def declined(payment_id, amount):
            raise BadRequestError("The amount must be at least INR 1.00")

        monkeypatch.setattr(refund_routes, "refund_payment", declined)
        booking_id = self.paid_booking_id(client, room)
        request_id = self.request_refund(client, booking_id).json()["id"]

        response = client.post(f"/refund-requests/{request_id}/approve", headers=admin_headers, json={})

        assert response.status_code == 502
        stored = client.get(f"/refund-requests/{request_id}", headers=admin_headers).json()
        assert stored["status"] == "refund_failed"
        assert client.get(f"/bookings/{booking_id}", headers=admin_headers).json()["payment_status"] == "paid"

    def test_unpaid_booking_cannot_request(self, client, room):
        booking_id = client.post("/bookings/", json=booking_payload(room.id)).json()["booking"]["id"]

        response = self.request_refund(client, booking_id)

        assert response.status_code == 400
        assert response.json() == {"detail": "Only paid bookings can be refunded"}

    def test_reject_and_delete(self, client, room, admin_headers, paid_gateway):
        booking_id = self.paid_booking_id(client, room)
        request_id = self.request_refund(client, booking_id).json()["id"]

        rejected = client.post(f"/refund-requests/{request_id}/reject", headers=admin_headers,
                               json={"admin_notes": "Non-refundable rate"})
        assert rejected.json()["status"] == "rejected"

        listed = client.get("/refund-requests/", headers=admin_headers, params={"status": "rejected"})
        assert [r["id"] for r in listed.json()] == [request_id]

        assert client.delete(f"/refund-requests/{request_id}", headers=admin_headers).status_code == 200
        assert client.get(f"/refund-requests/{request_id}", headers=admin_headers).status_code == 404
