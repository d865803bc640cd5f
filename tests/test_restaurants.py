"""Tests for restaurant listing, detail, creation and availability."""

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tablebook.models.restaurant import Restaurant


def _add(db: Session, name: str, location: str, cuisines: list[str]) -> Restaurant:
    restaurant = Restaurant(
        name=name,
        rating=4.2,
        rating_count=5,
        cuisines=cuisines,
        price_for_two=800,
        address="1 Main Road",
        location=location,
        opening_time="11:00",
        closing_time="22:00",
        phone="555-0100",
        other_images=[],
        menu_images=[],
        time_slots=[12, 19],
        info=[],
        total_seats=20,
    )
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def _form(**overrides) -> dict:
    data = {
        "name": "Trattoria Roma",
        "rating": "4.5",
        "ratingCount": "120",
        "cuisines": ["Italian", "Pizza"],
        "priceForTwo": "1500",
        "address": "22 Via Appia",
        "location": "Mumbai",
        "openingTime": "12:00",
        "closingTime": "23:30",
        "phone": "+91 22 5555 0000",
        "totalSeats": "40",
        "timeSlots": ["19", "13", "21"],
        "direction": "Next to the station",
        "info": ["Valet parking", "Live music"],
    }
    data.update(overrides)
    return data


class TestRestaurantList:
    def test_list_all(self, client: TestClient, db_session: Session):
        _add(db_session, "Spice Route", "Kolkata", ["North Indian"])
        _add(db_session, "Sushi Bar", "Mumbai", ["Japanese"])

        response = client.get("/restaurants")
        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Spice Route", "Sushi Bar"]

    def test_filter_by_location_case_insensitive(self, client: TestClient, db_session: Session):
        _add(db_session, "Spice Route", "Kolkata", ["North Indian"])
        _add(db_session, "Sushi Bar", "Mumbai", ["Japanese"])

        response = client.get("/restaurants?location=mumbai")
        assert [r["name"] for r in response.json()] == ["Sushi Bar"]

    def test_search_matches_name_or_cuisine(self, client: TestClient, db_session: Session):
        _add(db_session, "Spice Route", "Kolkata", ["North Indian"])
        _add(db_session, "Sushi Bar", "Mumbai", ["Japanese", "Asian"])
        _add(db_session, "Dragon House", "Mumbai", ["Chinese", "asian fusion"])

        by_name = client.get("/restaurants?q=SUSHI").json()
        assert [r["name"] for r in by_name] == ["Sushi Bar"]

        by_cuisine = client.get("/restaurants?q=asian").json()
        assert [r["name"] for r in by_cuisine] == ["Sushi Bar", "Dragon House"]

        combined = client.get("/restaurants?location=Kolkata&q=asian").json()
        assert combined == []

    def test_response_uses_camel_case(self, client: TestClient, restaurant: Restaurant):
        data = client.get("/restaurants").json()[0]
        assert data["totalSeats"] == 10
        assert data["timeSlots"] == [18, 19, 20]
        assert data["priceForTwo"] == 1200
        assert data["ratingCount"] == 10


class TestRestaurantDetail:
    def test_get_restaurant(self, client: TestClient, restaurant: Restaurant):
        response = client.get(f"/restaurants/{restaurant.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Spice Route"

    def test_get_unknown_restaurant(self, client: TestClient):
        response = client.get("/restaurants/999")
        assert response.status_code == 404
        assert response.json()["error"] == "Restaurant not found"

    def test_get_malformed_id(self, client: TestClient):
        response = client.get("/restaurants/not-an-id")
        assert response.status_code == 400

    def test_get_out_of_range_id(self, client: TestClient):
        response = client.get(f"/restaurants/{10**20}")
        assert response.status_code == 400
        assert "restaurant_id" in response.json()["error"]

        assert client.get(f"/restaurants/{10**20}/reviews").status_code == 400


class TestAvailability:
    def test_empty_slot_has_full_capacity(self, client: TestClient, restaurant: Restaurant):
        response = client.get(f"/restaurants/{restaurant.id}/availability?date=2024-06-01&timeSlot=19")
        assert response.status_code == 200
        assert response.json() == {
            "restaurantId": restaurant.id,
            "date": "2024-06-01",
            "timeSlot": 19,
            "totalSeats": 10,
            "bookedSeats": 0,
            "availableSeats": 10,
        }

    def test_unknown_restaurant(self, client: TestClient):
        response = client.get("/restaurants/999/availability?date=2024-06-01&timeSlot=19")
        assert response.status_code == 404

    def test_missing_params(self, client: TestClient, restaurant: Restaurant):
        response = client.get(f"/restaurants/{restaurant.id}/availability?date=2024-06-01")
        assert response.status_code == 400

    def test_out_of_range_time_slot(self, client: TestClient, restaurant: Restaurant):
        response = client.get(f"/restaurants/{restaurant.id}/availability?date=2024-06-01&timeSlot={10**20}")
        assert response.status_code == 400
        assert "timeSlot" in response.json()["error"]


class TestAddRestaurant:
    def test_add_with_images(self, client: TestClient, upload_dir):
        response = client.post(
            "/add-restaurants",
            data=_form(),
            files=[
                ("mainImage", ("front.jpg", b"\xff\xd8\xff" + b"\x00" * 64, "image/jpeg")),
                ("otherImages", ("inside.png", b"\x89PNG" + b"\x00" * 64, "image/png")),
                ("otherImages", ("terrace.webp", b"RIFF" + b"\x00" * 64, "image/webp")),
                ("menuImages", ("menu.jpg", b"\xff\xd8\xff" + b"\x00" * 32, "image/jpeg")),
            ],
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Trattoria Roma"
        assert data["cuisines"] == ["Italian", "Pizza"]
        assert data["timeSlots"] == [13, 19, 21]
        assert data["info"] == ["Valet parking", "Live music"]
        assert data["mainImage"].startswith("restaurants/")
        assert len(data["otherImages"]) == 2
        assert len(data["menuImages"]) == 1
        assert (upload_dir / data["mainImage"]).exists()
        assert len(list((upload_dir / "restaurants").iterdir())) == 4

    def test_add_without_images(self, client: TestClient):
        response = client.post("/add-restaurants", data=_form(cuisines="Italian, Pizza"))
        assert response.status_code == 201
        data = response.json()
        assert data["cuisines"] == ["Italian", "Pizza"]
        assert data["mainImage"] is None
        assert data["otherImages"] == []

        listed = client.get("/restaurants?q=pizza").json()
        assert [r["id"] for r in listed] == [data["id"]]

    def test_add_rejects_non_image(self, client: TestClient, upload_dir):
        response = client.post(
            "/add-restaurants",
            data=_form(),
            files=[
                ("mainImage", ("front.jpg", b"\xff\xd8\xff", "image/jpeg")),
                ("menuImages", ("menu.exe", b"MZ", "application/octet-stream")),
            ],
        )
        assert response.status_code == 400
        assert "Unsupported image type" in response.json()["error"]
        stored = upload_dir / "restaurants"
        assert not stored.exists() or list(stored.iterdir()) == []

    def test_add_requires_total_seats(self, client: TestClient):
        data = _form()
        del data["totalSeats"]
        response = client.post("/add-restaurants", data=data)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_add_rejects_zero_seats(self, client: TestClient):
        response = client.post("/add-restaurants", data=_form(totalSeats="0"))
        assert response.status_code == 400

    def test_add_rejects_oversized_image(self, client: TestClient, upload_dir, monkeypatch):
        from tablebook.config import get_settings

        monkeypatch.setattr(get_settings(), "MAX_UPLOAD_SIZE_MB", 0)
        response = client.post(
            "/add-restaurants",
            data=_form(),
            files=[("mainImage", ("front.jpg", b"\xff\xd8\xff" + b"\x00" * 64, "image/jpeg"))],
        )
        assert response.status_code == 400
        assert "Image too large" in response.json()["error"]

    def test_failed_insert_removes_stored_images(self, client: TestClient, upload_dir, monkeypatch):
        from main import app
        from tablebook.services.catalog import CatalogService

        def fail_insert(self, db, **fields):
            raise SQLAlchemyError("insert failed")

        monkeypatch.setattr(CatalogService, "create_restaurant", fail_insert)
        with TestClient(app, raise_server_exceptions=False) as failing_client:
            response = failing_client.post(
                "/add-restaurants",
                data=_form(),
                files=[
                    ("mainImage", ("front.jpg", b"\xff\xd8\xff" + b"\x00" * 64, "image/jpeg")),
                    ("menuImages", ("menu.jpg", b"\xff\xd8\xff" + b"\x00" * 32, "image/jpeg")),
                ],
            )

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert list((upload_dir / "restaurants").iterdir()) == []
