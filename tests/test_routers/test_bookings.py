import json
from datetime import date, timedelta

import httpx
import respx
from httpx import Response

HOTEL_API = "http://hotel.test/api"
ROOM_URL = f"{HOTEL_API}/rooms/7"
AVAILABILITY_URL = f"{HOTEL_API}/rooms/7/availability"
LOYALTY_URL = f"{HOTEL_API}/loyalty/account"
RESERVATIONS_URL = f"{HOTEL_API}/client/reservations"

ROOM_JSON = {
    "id": 7,
    "number": "204",
    "roomType": "DELUXE",
    "capacity": 4,
    "price": 100.0,
    "currency": "EUR",
    "status": "OCCUPIED",
}


def _body(guests=2, points=0, offset=10, nights=3):
    check_in = date.today() + timedelta(days=offset)
    return {
        "room_id": 7,
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=nights)).isoformat(),
        "number_of_guests": guests,
        "points_used": points,
    }


@respx.mock
async def test_booking_confirmed(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json=ROOM_JSON))
    respx.get(LOYALTY_URL).mock(return_value=Response(200, json={"balance": 5000}))
    respx.get(AVAILABILITY_URL).mock(return_value=Response(200, json={"available": True}))
    reservation = respx.post(RESERVATIONS_URL).mock(
        return_value=Response(
            201,
            json={"id": 900, "status": "CONFIRMED", "totalPrice": 250.0, "nights": 3},
        )
    )

    body = _body(points=5000)
    resp = await client.post("/bookings", json=body)

    assert resp.status_code == 201
    data = resp.json()
    assert data["state"] == "confirmed"
    assert data["confirmation"] == {"id": 900, "status": "CONFIRMED", "totalPrice": 250.0, "nights": 3}
    assert float(data["breakdown"]["total"]) == 250.0
    assert data["error_code"] is None

    sent = json.loads(reservation.calls.last.request.content)
    assert sent == {
        "roomId": 7,
        "checkIn": body["check_in"],
        "checkOut": body["check_out"],
        "numberOfGuests": 2,
        "pointsUsed": 5000,
        "currency": "EUR",
    }


@respx.mock
async def test_booking_over_capacity_rejected(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json=ROOM_JSON))
    reservation = respx.post(RESERVATIONS_URL).mock(return_value=Response(201, json={"id": 1}))

    resp = await client.post("/bookings", json=_body(guests=5))

    assert resp.status_code == 422
    data = resp.json()
    assert data["state"] == "rejected"
    assert data["error_code"] == "capacity_exceeded"
    assert data["message"] == "Maximum capacity is 4 guests"
    assert not reservation.called


@respx.mock
async def test_booking_out_of_service_rejected(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json={**ROOM_JSON, "status": "OUT_OF_SERVICE"}))
    reservation = respx.post(RESERVATIONS_URL).mock(return_value=Response(201, json={"id": 1}))

    resp = await client.post("/bookings", json=_body())

    assert resp.status_code == 422
    assert resp.json()["error_code"] == "room_out_of_service"
    assert not reservation.called


@respx.mock
async def test_booking_past_date_rejected(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json=ROOM_JSON))

    resp = await client.post("/bookings", json=_body(offset=-1))

    assert resp.status_code == 422
    assert resp.json()["error_code"] == "past_date"


@respx.mock
async def test_booking_conflict_passes_backend_status(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json=ROOM_JSON))
    respx.get(AVAILABILITY_URL).mock(return_value=Response(200, json={"available": True}))
    reservation = respx.post(RESERVATIONS_URL).mock(
        return_value=Response(409, json={"message": "Room not available for selected dates"})
    )

    resp = await client.post("/bookings", json=_body())

    assert resp.status_code == 409
    data = resp.json()
    assert data["state"] == "failed"
    assert data["message"] == "Room not available for selected dates"
    assert reservation.call_count == 1


@respx.mock
async def test_booking_backend_crash_is_bad_gateway(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json=ROOM_JSON))
    respx.get(AVAILABILITY_URL).mock(return_value=Response(200, json={"available": True}))
    respx.post(RESERVATIONS_URL).mock(return_value=Response(500, text="oops"))

    resp = await client.post("/bookings", json=_body())

    assert resp.status_code == 502
    assert resp.json()["message"] == "HTTP error! status: 500"


@respx.mock
async def test_booking_network_failure_not_retried(client):
    respx.get(ROOM_URL).mock(return_value=Response(200, json=ROOM_JSON))
    respx.get(AVAILABILITY_URL).mock(return_value=Response(200, json={"available": True}))
    reservation = respx.post(RESERVATIONS_URL).mock(side_effect=httpx.ConnectError("refused"))

    resp = await client.post("/bookings", json=_body())

    assert resp.status_code == 502
    data = resp.json()
    assert data["state"] == "failed"
    assert data["error_code"] == "network_error"
    assert reservation.call_count == 1


async def test_booking_negative_points_refused_by_schema(client):
    resp = await client.post("/bookings", json=_body(points=-5))
    assert resp.status_code == 422
