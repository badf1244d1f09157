"""Tests for the MongoDB product repository, against a mocked collection."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from bson import Decimal128, ObjectId
from pymongo.errors import AutoReconnect, OperationFailure

from storefront.domain.exceptions import EntityNotFoundError, StorageError
from storefront.domain.model.product import Category
from storefront.infrastructure.persistence.mongo_product_repository import (
    NEWEST_FIRST,
    MongoProductRepository,
)
from storefront.infrastructure.persistence.mongo_unit_of_work import MongoUnitOfWork
from tests.fakes import make_product

OID = ObjectId("65a000000000000000000001")
USER_OID = ObjectId("65c000000000000000000001")


def _raw(**overrides):
    raw = {
        "_id": OID,
        "name": "Laptop",
        "price": Decimal128("1200.00"),
        "description": "A portable computer",
        "category": "Electronics",
        "stock": 5,
        "user": "owner-1",
        "updatedBy": "editor-1",
        "createdAt": datetime(2024, 1, 1, 12, 0),
        "updatedAt": datetime(2024, 1, 2, 12, 0),
    }
    raw.update(overrides)
    return raw


def _setup() -> tuple[MongoProductRepository, MagicMock]:
    collection = MagicMock()
    return MongoProductRepository(collection), collection


def _active_uow() -> tuple[MongoUnitOfWork, MagicMock]:
    client = MagicMock()
    uow = MongoUnitOfWork(client)
    uow.begin()
    return uow, client.start_session.return_value


class TestGetById:

    def test_maps_document(self):
        repo, collection = _setup()
        collection.find_one.return_value = _raw()

        product = repo.get_by_id(str(OID))

        assert product.id == str(OID)
        assert product.price.amount == Decimal("1200.00")
        assert product.category is Category.ELECTRONICS
        assert product.owner_id == "owner-1"
        assert product.updated_by == "editor-1"
        assert product.created_at.tzinfo is timezone.utc
        collection.find_one.assert_called_once_with({"_id": OID}, session=None)

    def test_legacy_numeric_price(self):
        repo, collection = _setup()
        collection.find_one.return_value = _raw(price=75)
        assert repo.get_by_id(str(OID)).price.to_plain() == "75.00"

    def test_object_id_user_references_read_back_as_strings(self):
        repo, collection = _setup()
        collection.find_one.return_value = _raw(user=USER_OID, updatedBy=USER_OID)

        product = repo.get_by_id(str(OID))

        assert product.owner_id == str(USER_OID)
        assert product.updated_by == str(USER_OID)

    def test_reads_inside_unit_of_work_session(self):
        repo, collection = _setup()
        uow, session = _active_uow()
        collection.find_one.return_value = _raw()

        repo.get_by_id(str(OID), uow)

        assert collection.find_one.call_args.kwargs["session"] is session

    def test_missing(self):
        repo, collection = _setup()
        collection.find_one.return_value = None
        assert repo.get_by_id(str(OID)) is None

    def test_malformed_id_is_missing_without_query(self):
        repo, collection = _setup()
        assert repo.get_by_id("not-an-object-id") is None
        collection.find_one.assert_not_called()

    def test_driver_error_is_storage_error(self):
        repo, collection = _setup()
        collection.find_one.side_effect = AutoReconnect("primary gone")
        with pytest.raises(StorageError, match="primary gone"):
            repo.get_by_id(str(OID))


class TestDecrementStock:

    def test_conditional_update(self):
        repo, collection = _setup()
        uow, session = _active_uow()
        collection.update_one.return_value.modified_count = 1

        assert repo.decrement_stock(str(OID), 3, uow) is True

        filter_, update = collection.update_one.call_args.args
        assert filter_ == {"_id": OID, "stock": {"$gte": 3}}
        assert update["$inc"] == {"stock": -3}
        assert "updatedAt" in update["$set"]
        assert collection.update_one.call_args.kwargs["session"] is session

    def test_not_enough_stock(self):
        repo, collection = _setup()
        uow, _ = _active_uow()
        collection.update_one.return_value.modified_count = 0
        assert repo.decrement_stock(str(OID), 3, uow) is False

    def test_write_conflict_is_transient_storage_error(self):
        repo, collection = _setup()
        uow, _ = _active_uow()
        collection.update_one.side_effect = OperationFailure(
            "WriteConflict", 112, {"errorLabels": ["TransientTransactionError"]}
        )

        with pytest.raises(StorageError, match="decrement stock") as info:
            repo.decrement_stock(str(OID), 3, uow)

        assert info.value.transient is True

    def test_other_failures_are_not_transient(self):
        repo, collection = _setup()
        uow, _ = _active_uow()
        collection.update_one.side_effect = OperationFailure("not authorized", 13)

        with pytest.raises(StorageError) as info:
            repo.decrement_stock(str(OID), 3, uow)

        assert info.value.transient is False

    def test_malformed_id(self):
        repo, collection = _setup()
        uow, _ = _active_uow()
        assert repo.decrement_stock("nope", 1, uow) is False
        collection.update_one.assert_not_called()


class TestListing:

    def test_find_page_sorts_newest_first(self):
        repo, collection = _setup()
        cursor = collection.find.return_value
        cursor.sort.return_value.skip.return_value.limit.return_value = [_raw()]

        products = repo.find_page(None, 20, 10)

        assert [p.name for p in products] == ["Laptop"]
        collection.find.assert_called_once_with({})
        cursor.sort.assert_called_once_with(NEWEST_FIRST)
        cursor.sort.return_value.skip.assert_called_once_with(20)
        cursor.sort.return_value.skip.return_value.limit.assert_called_once_with(10)

    def test_search_is_escaped_case_insensitive_regex(self):
        repo, collection = _setup()
        collection.count_documents.return_value = 4

        assert repo.count("usb-c (2m)") == 4

        collection.count_documents.assert_called_once_with(
            {"name": {"$regex": r"usb\-c\ \(2m\)", "$options": "i"}}
        )

    def test_count_without_search(self):
        repo, collection = _setup()
        collection.count_documents.return_value = 0
        repo.count(None)
        collection.count_documents.assert_called_once_with({})


class TestWrites:

    def test_add_assigns_id_and_stores_decimal(self):
        repo, collection = _setup()
        collection.insert_one.return_value.inserted_id = OID
        product = make_product(None, "Laptop", price="1200")

        repo.add(product)

        assert product.id == str(OID)
        stored = collection.insert_one.call_args.args[0]
        assert stored["price"] == Decimal128("1200")
        assert stored["category"] == "Electronics"
        assert stored["user"] == "owner-1"

    def test_add_stores_user_ids_as_object_id_references(self):
        repo, collection = _setup()
        collection.insert_one.return_value.inserted_id = OID
        product = make_product(None, "Laptop")
        product.owner_id = product.updated_by = str(USER_OID)

        repo.add(product)

        stored = collection.insert_one.call_args.args[0]
        assert stored["user"] == USER_OID
        assert stored["updatedBy"] == USER_OID

    def test_save_sets_only_edited_fields_and_audit_stamps(self):
        repo, collection = _setup()
        collection.update_one.return_value.matched_count = 1
        product = make_product(str(OID), "Laptop Pro", stock=7)

        repo.save(product, fields=["name"])

        filter_, update = collection.update_one.call_args.args
        assert filter_ == {"_id": OID}
        assert update == {"$set": {
            "name": "Laptop Pro",
            "updatedBy": "owner-1",
            "updatedAt": product.updated_at,
        }}

    def test_save_price_and_category(self):
        repo, collection = _setup()
        collection.update_one.return_value.matched_count = 1
        product = make_product(str(OID), "Laptop", price="999", category=Category.OFFICE)

        repo.save(product, fields={"price", "category"})

        changes = collection.update_one.call_args.args[1]["$set"]
        assert set(changes) == {"price", "category", "updatedBy", "updatedAt"}
        assert changes["price"] == Decimal128("999")
        assert changes["category"] == "office"

    def test_save_refuses_fields_that_are_not_editable(self):
        repo, collection = _setup()
        with pytest.raises(ValueError, match="createdAt"):
            repo.save(make_product(str(OID), "Laptop"), fields=["createdAt"])
        collection.update_one.assert_not_called()

    def test_save_missing_product(self):
        repo, collection = _setup()
        collection.update_one.return_value.matched_count = 0
        with pytest.raises(EntityNotFoundError):
            repo.save(make_product(str(OID), "Laptop"), fields=["name"])

    @pytest.mark.parametrize("deleted, expected", [(1, True), (0, False)])
    def test_delete(self, deleted, expected):
        repo, collection = _setup()
        collection.delete_one.return_value.deleted_count = deleted
        assert repo.delete(str(OID)) is expected
        collection.delete_one.assert_called_once_with({"_id": OID})
