"""
Tests for FavoritesRepository against a temporary SQLite store
"""
import pytest

from eventfinder.exceptions import NotFoundException, ValidationException


class TestFavoritesRepository:
    def test_list_empty(self, services):
        assert services.favorites.list() == []

    def test_upsert_inserts_and_stamps_created_at(self, services, sample_favorite):
        created = services.favorites.upsert(sample_favorite)

        assert created is True
        items = services.favorites.list()
        assert len(items) == 1
        assert items[0]["id"] == "42"
        assert items[0]["name"] == "Test Event"
        assert items[0]["imageUrl"] == "https://img.example.com/large.jpg"
        assert items[0]["createdAt"]

    def test_upsert_same_id_updates_in_place(self, services, sample_favorite):
        """Second write merges fields and keeps the original creation time"""
        services.favorites.upsert(sample_favorite)
        first = services.favorites.get("42")

        created = services.favorites.upsert({"id": "42", "name": "Renamed Event"})

        assert created is False
        items = services.favorites.list()
        assert len(items) == 1
        assert items[0]["name"] == "Renamed Event"
        assert items[0]["venue"] == "Hollywood Bowl"
        assert items[0]["createdAt"] == first["createdAt"]

    def test_client_created_at_is_ignored(self, services):
        services.favorites.upsert({"id": "7", "name": "X", "createdAt": "1999-01-01T00:00:00+00:00"})

        assert services.favorites.get("7")["createdAt"] != "1999-01-01T00:00:00+00:00"

    def test_list_is_ordered_by_insertion(self, services):
        for event_id in ("c", "a", "b"):
            services.favorites.upsert({"id": event_id, "name": event_id.upper()})

        assert [f["id"] for f in services.favorites.list()] == ["c", "a", "b"]

    def test_update_does_not_reorder(self, services):
        services.favorites.upsert({"id": "first"})
        services.favorites.upsert({"id": "second"})
        services.favorites.upsert({"id": "first", "name": "Updated"})

        assert [f["id"] for f in services.favorites.list()] == ["first", "second"]

    def test_delete_removes_item(self, services, sample_favorite):
        services.favorites.upsert(sample_favorite)

        assert services.favorites.delete("42") is True
        assert services.favorites.list() == []
        assert services.favorites.get("42") is None

    def test_delete_missing_raises_not_found(self, services):
        with pytest.raises(NotFoundException):
            services.favorites.delete("does-not-exist")

    def test_delete_twice(self, services, sample_favorite):
        services.favorites.upsert(sample_favorite)
        services.favorites.delete("42")

        with pytest.raises(NotFoundException):
            services.favorites.delete("42")

    @pytest.mark.parametrize("body", [None, [], "42", {}, {"name": "No id"}, {"id": ""}])
    def test_upsert_rejects_missing_id(self, services, body):
        with pytest.raises(ValidationException):
            services.favorites.upsert(body)

    def test_upsert_rejects_non_string_id(self, services):
        with pytest.raises(ValidationException) as exc_info:
            services.favorites.upsert({"id": 42})
        assert exc_info.value.message == "Event id must be a string"

    def test_count(self, services):
        assert services.favorites.count() == 0
        services.favorites.upsert({"id": "1"})
        services.favorites.upsert({"id": "2"})
        assert services.favorites.count() == 2
