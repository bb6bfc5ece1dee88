from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from core.infrastructure.mongo.gallery_store import MongoGalleryStore
from core.models.errors import NotFoundError
from core.models.gallery import GalleryItem
from core.models.pagination import FetchedRows
from handlers.gallery.service import GalleryService


@pytest.fixture
def service(gallery_collection) -> GalleryService:
    return GalleryService(MongoGalleryStore(gallery_collection))


class TestListPage:
    def test_first_page_and_continuation(self, service, make_item) -> None:
        newest, middle, oldest = make_item(30), make_item(20), make_item(10)

        first = service.list_page(limit=2, cursor=None)

        assert [item.id for item in first.items] == [str(newest["_id"]), str(middle["_id"])]
        assert first.has_more is True
        assert first.next_cursor == str(middle["_id"])
        assert first.limit == 2

        second = service.list_page(limit=2, cursor=first.next_cursor)

        assert [item.id for item in second.items] == [str(oldest["_id"])]
        assert second.has_more is False
        assert second.next_cursor is None

    def test_walk_covers_every_item_once(self, service, make_item) -> None:
        expected = [str(make_item(minutes)["_id"]) for minutes in range(7, 0, -1)]

        seen: list[str] = []
        cursor = None
        pages = 0
        while True:
            page = service.list_page(limit=3, cursor=cursor)
            seen.extend(item.id for item in page.items)
            pages += 1
            if not page.has_more:
                break
            cursor = page.next_cursor

        assert seen == expected
        assert pages == 3

    def test_exact_multiple_ends_without_empty_page(self, service, make_item) -> None:
        for minutes in (4, 3, 2, 1):
            make_item(minutes)

        first = service.list_page(limit=2, cursor=None)
        second = service.list_page(limit=2, cursor=first.next_cursor)

        assert len(second.items) == 2
        assert second.has_more is False
        assert second.next_cursor is None

    def test_empty_gallery(self, service) -> None:
        page = service.list_page(limit=10, cursor=None)

        assert page.items == []
        assert page.has_more is False
        assert page.next_cursor is None

    def test_cursor_past_the_end(self, service, gallery_items) -> None:
        oldest = str(gallery_items[-1]["_id"])

        page = service.list_page(limit=10, cursor=oldest)

        assert page.items == []
        assert page.has_more is False

    def test_walk_continues_past_odd_document(self, service, make_item) -> None:
        ids = [str(make_item(5)["_id"]), str(make_item(4)["_id"])]
        ids.append(str(make_item(3, prompt=42, metadata=None)["_id"]))
        ids.extend(str(make_item(minutes)["_id"]) for minutes in (2, 1))

        seen: list[str] = []
        cursor = None
        while True:
            page = service.list_page(limit=2, cursor=cursor)
            seen.extend(item.id for item in page.items)
            if not page.has_more:
                break
            cursor = page.next_cursor

        assert seen == ids

    def test_skipped_row_still_counts_for_continuation(self) -> None:
        newest, skipped, oldest = ObjectId(), ObjectId(), ObjectId()
        repository = MagicMock()
        repository.list_before.return_value = FetchedRows(
            items=[GalleryItem.from_document({"_id": newest})],
            row_ids=[str(newest), str(skipped), str(oldest)],
        )

        page = GalleryService(repository).list_page(limit=2, cursor=None)

        assert [item.id for item in page.items] == [str(newest)]
        assert page.has_more is True
        assert page.next_cursor == str(skipped)

    def test_requests_one_extra_row(self) -> None:
        repository = MagicMock()
        repository.list_before.return_value = FetchedRows()

        GalleryService(repository).list_page(limit=5, cursor="c")

        repository.list_before.assert_called_once_with(before_id="c", limit=6)


class TestListLegacy:
    def test_caps_at_requested_limit(self, service, gallery_items) -> None:
        items = service.list_legacy(limit=2)

        assert [item.id for item in items] == [str(doc["_id"]) for doc in gallery_items[:2]]

    def test_views_are_public(self, service, make_item) -> None:
        make_item(1, bot_token="123:secret")

        [view] = service.list_legacy()

        assert view.model_dump()["telegram"] == {"chat_id": -100123, "file_id": "file-1"}
        assert view.timestamp == "2024-01-01T10:01:00+00:00"


class TestDeleteItem:
    def test_delete_then_not_found(self, service, gallery_items) -> None:
        item_id = str(gallery_items[0]["_id"])

        assert service.delete_item(item_id) == item_id

        with pytest.raises(NotFoundError) as exc_info:
            service.delete_item(item_id)

        assert exc_info.value.message == "Not found"

    def test_unknown_item(self, service) -> None:
        with pytest.raises(NotFoundError):
            service.delete_item(str(ObjectId()))
