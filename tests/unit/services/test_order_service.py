"""
Unit tests for OrderService.

Covers order entry, pancake composition, the lifecycle transitions, the
registry moves they cause, queries, and the events reported to the order log.
"""

import uuid
from unittest.mock import Mock

import pytest

from fixtures.order_fixtures import (
    DARK_CHOCOLATE,
    HAZELNUTS,
    MILK_CHOCOLATE,
    WHIPPED_CREAM,
    description_for,
    order_in_status,
)
from pancake_lab.exceptions import (
    ContractError,
    DomainArgumentError,
    InvalidCoordinatesError,
    InvalidQuantityError,
    InvalidStateError,
    OrderNotFoundError,
    PancakeNotFoundError,
    UnknownIngredientError,
    UnknownOrderStatusError,
)
from pancake_lab.models import OrderStatus
from pancake_lab.services import InMemoryOrderLogger, OrderLogger, OrderService


def _events(order_log):
    """Event tags of all records, oldest first."""
    return [record.split("] [", 1)[1].split("]", 1)[0] for record in order_log.get_logs()]


class TestConstruction:
    """Tests for wiring the service."""

    def test_defaults_to_process_wide_log(self):
        service = OrderService()
        assert service.order_logger is InMemoryOrderLogger.get_instance()

    def test_rejects_non_logger(self):
        with pytest.raises(ContractError):
            OrderService(order_logger=object())

    def test_instances_do_not_share_registries(self, order_log):
        first, second = OrderService(order_log), OrderService(order_log)
        order = first.create_order(1, 1)
        with pytest.raises(OrderNotFoundError):
            second.get_order_status(order.id)


class TestCreateOrder:
    """Tests for order entry."""

    def test_initial_state(self, service):
        order = service.create_order(5, 10)
        assert isinstance(order.id, uuid.UUID)
        assert (order.building, order.room) == (5, 10)
        assert order.status == "NEW"
        assert order.pancakes == ()
        assert service.list_orders_with_status(OrderStatus.NEW) == {order.id}

    @pytest.mark.parametrize("building, room", [(0, 1), (11, 1), (1, 0), (1, 1000)])
    def test_out_of_range(self, service, order_log, building, room):
        with pytest.raises(InvalidCoordinatesError):
            service.create_order(building, room)
        assert service.list_orders_with_status("NEW") == set()
        assert order_log.get_last_log() is None

    def test_errors_are_domain_argument_errors(self, service):
        with pytest.raises(DomainArgumentError):
            service.create_order(0, 1)
        with pytest.raises(ValueError):
            service.create_order(0, 1)

    def test_logs_create(self, service, order_log):
        order = service.create_order(2, 3)
        assert f"[CREATE] Order {order.id} for building 2 room 3" in order_log.get_last_log()

    def test_ids_are_unique(self, service):
        ids = {service.create_order(1, 1).id for _ in range(50)}
        assert len(ids) == 50


class TestAddPancakes:
    """Tests for adding pancakes."""

    def test_add_single(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        assert service.view_order(new_order.id) == ["Delicious pancake with dark chocolate!"]
        status = service.get_order_status(new_order.id)
        assert len(status.pancakes) == 1
        assert status.pancakes[0].description == "Delicious pancake with dark chocolate!"

    def test_add_many_builds_independent_pancakes(self, service, new_order):
        service.add_pancakes(new_order.id, [MILK_CHOCOLATE, HAZELNUTS], 3)
        pancakes = service.get_pancake_descriptions(new_order.id)
        assert len(pancakes) == 3
        assert len({p.pancake_id for p in pancakes}) == 3
        for pancake in pancakes:
            assert pancake.order_id == new_order.id
            assert pancake.ingredients == ("milk chocolate", "hazelnuts")

    def test_duplicates_collapse(self, service, new_order):
        service.add_pancakes(new_order.id, [HAZELNUTS, WHIPPED_CREAM, HAZELNUTS], 1)
        assert service.view_order(new_order.id) == ["Delicious pancake with hazelnuts, whipped cream!"]

    def test_names_are_case_insensitive(self, service, new_order):
        service.add_pancakes(new_order.id, ["Whipped Cream"], 1)
        assert service.view_order(new_order.id) == ["Delicious pancake with whipped cream!"]

    def test_single_string_is_one_name(self, service, new_order):
        service.add_pancakes(new_order.id, DARK_CHOCOLATE, 1)
        assert service.view_order(new_order.id) == ["Delicious pancake with dark chocolate!"]

    def test_zero_quantity(self, service, new_order):
        with pytest.raises(InvalidQuantityError) as exc_info:
            service.add_pancakes(new_order.id, [MILK_CHOCOLATE], 0)
        assert str(exc_info.value) == "Quantity must be positive"
        assert service.view_order(new_order.id) == []

    def test_quantity_checked_before_order_lookup(self, service):
        with pytest.raises(InvalidQuantityError):
            service.add_pancakes(uuid.uuid4(), [MILK_CHOCOLATE], -1)

    def test_unknown_order(self, service):
        missing = uuid.uuid4()
        with pytest.raises(OrderNotFoundError, match=f"Order {missing} not found"):
            service.add_pancakes(missing, [DARK_CHOCOLATE], 1)

    def test_state_checked_before_names(self, service):
        order = order_in_status(service, OrderStatus.COMPLETED)
        with pytest.raises(InvalidStateError):
            service.add_pancakes(order.id, ["maple syrup"], 1)

    def test_unknown_ingredient_reports_first(self, service, new_order):
        with pytest.raises(UnknownIngredientError, match="Unknown ingredient: jam"):
            service.add_pancakes(new_order.id, [DARK_CHOCOLATE, "jam", "honey"], 2)
        assert service.view_order(new_order.id) == []

    def test_no_ingredients(self, service, new_order):
        with pytest.raises(DomainArgumentError):
            service.add_pancakes(new_order.id, [], 1)

    @pytest.mark.parametrize(
        "status", [OrderStatus.COMPLETED, OrderStatus.PREPARING, OrderStatus.DELIVERED, OrderStatus.CANCELLED]
    )
    def test_only_new_orders_accept_pancakes(self, service, status):
        order = order_in_status(service, status)
        with pytest.raises(InvalidStateError, match="must be NEW"):
            service.add_pancakes(order.id, [DARK_CHOCOLATE], 1)

    def test_logs_add_per_pancake(self, service, order_log, new_order):
        order_log.clear_logs()
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 3)
        assert _events(order_log) == ["ADD", "ADD", "ADD"]
        assert order_log.get_last_log().endswith(
            f"Delicious pancake with dark chocolate! to order {new_order.id}"
        )


class TestRemovePancake:
    """Tests for removing single pancakes."""

    def test_by_ingredients_removes_earliest_match(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE, HAZELNUTS], 1)
        service.add_pancakes(new_order.id, [MILK_CHOCOLATE], 1)
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE, HAZELNUTS], 1)
        before = service.get_pancake_descriptions(new_order.id)

        service.remove_pancake(new_order.id, [HAZELNUTS, DARK_CHOCOLATE])

        after = service.get_pancake_descriptions(new_order.id)
        assert [p.pancake_id for p in after] == [before[1].pancake_id, before[2].pancake_id]

    def test_by_ingredients_requires_exact_set(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE, HAZELNUTS], 1)
        with pytest.raises(PancakeNotFoundError, match="not found in order"):
            service.remove_pancake(new_order.id, [DARK_CHOCOLATE])
        assert len(service.view_order(new_order.id)) == 1

    def test_by_ingredients_unknown_name(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        with pytest.raises(DomainArgumentError):
            service.remove_pancake(new_order.id, ["jam"])

    def test_by_id(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 2)
        first, second = service.get_pancake_descriptions(new_order.id)
        service.remove_pancake(new_order.id, second.pancake_id)
        assert [p.pancake_id for p in service.get_pancake_descriptions(new_order.id)] == [first.pancake_id]

    def test_by_id_missing(self, service, new_order):
        missing = uuid.uuid4()
        with pytest.raises(PancakeNotFoundError, match=f"Pancake with ID {missing} not found"):
            service.remove_pancake_by_id(new_order.id, missing)

    def test_requires_new_order(self, service):
        order = order_in_status(service, OrderStatus.COMPLETED)
        pancake_id = service.get_pancake_descriptions(order.id)[0].pancake_id
        with pytest.raises(InvalidStateError):
            service.remove_pancake(order.id, pancake_id)
        with pytest.raises(InvalidStateError):
            service.remove_pancake(order.id, [DARK_CHOCOLATE])
        assert len(service.view_order(order.id)) == 1

    def test_logs_remove(self, service, order_log, new_order):
        service.add_pancakes(new_order.id, [WHIPPED_CREAM], 1)
        service.remove_pancake_by_ingredients(new_order.id, [WHIPPED_CREAM])
        assert order_log.get_last_log().endswith(
            f"[REMOVE] Delicious pancake with whipped cream! from order {new_order.id}"
        )


class TestRemovePancakes:
    """Tests for removing by description."""

    def test_removes_earliest_matches(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        service.add_pancakes(new_order.id, [MILK_CHOCOLATE], 1)
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 2)
        ids = [p.pancake_id for p in service.get_pancake_descriptions(new_order.id)]

        service.remove_pancakes(description_for(DARK_CHOCOLATE), new_order.id, 2)

        assert [p.pancake_id for p in service.get_pancake_descriptions(new_order.id)] == [ids[1], ids[3]]

    def test_not_enough_removes_nothing(self, service, order_log, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 2)
        order_log.clear_logs()
        with pytest.raises(PancakeNotFoundError, match="only 2 available"):
            service.remove_pancakes(description_for(DARK_CHOCOLATE), new_order.id, 3)
        assert len(service.view_order(new_order.id)) == 2
        assert order_log.get_logs() == ()

    def test_description_must_match_verbatim(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        with pytest.raises(PancakeNotFoundError):
            service.remove_pancakes("delicious pancake with dark chocolate!", new_order.id, 1)

    def test_zero_quantity(self, service, new_order):
        with pytest.raises(InvalidQuantityError):
            service.remove_pancakes(description_for(DARK_CHOCOLATE), new_order.id, 0)

    def test_round_trip_restores_list(self, service, new_order):
        service.add_pancakes(new_order.id, [WHIPPED_CREAM], 1)
        before = service.get_pancake_descriptions(new_order.id)
        service.add_pancakes(new_order.id, [MILK_CHOCOLATE, HAZELNUTS], 4)
        service.remove_pancakes(description_for(MILK_CHOCOLATE, HAZELNUTS), new_order.id, 4)
        assert service.get_pancake_descriptions(new_order.id) == before

    def test_logs_remove_per_pancake(self, service, order_log, new_order):
        service.add_pancakes(new_order.id, [HAZELNUTS], 3)
        order_log.clear_logs()
        service.remove_pancakes(description_for(HAZELNUTS), new_order.id, 2)
        assert _events(order_log) == ["REMOVE", "REMOVE"]


class TestLifecycle:
    """Tests for complete, prepare, deliver and cancel."""

    def test_complete(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        service.complete_order(new_order.id)
        assert service.get_order_status(new_order.id).status == "COMPLETED"
        assert service.list_orders_with_status(OrderStatus.COMPLETED) == {new_order.id}

    def test_complete_without_pancakes(self, service, new_order):
        with pytest.raises(InvalidStateError, match="with no pancakes"):
            service.complete_order(new_order.id)
        assert service.get_order_status(new_order.id).status == "NEW"

    def test_complete_twice(self, service, order_log):
        order = order_in_status(service, OrderStatus.COMPLETED)
        with pytest.raises(InvalidStateError):
            service.complete_order(order.id)
        assert "[ERROR] Invalid Completed" in order_log.get_last_log()

    def test_prepare_new_order(self, service, order_log, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        with pytest.raises(InvalidStateError) as exc_info:
            service.prepare_order(new_order.id)
        assert "COMPLETED" in str(exc_info.value)
        assert "NEW" in str(exc_info.value)
        assert order_log.get_last_log().endswith(
            f"[ERROR] Invalid Preparing for order {new_order.id} (current: NEW)"
        )

    def test_prepare_logs_status(self, service, order_log):
        order = order_in_status(service, OrderStatus.COMPLETED)
        service.prepare_order(order.id)
        assert order_log.get_last_log().endswith(f"[STATUS] Order {order.id} Preparing -> PREPARING")

    def test_deliver_returns_snapshot_and_archives(self, service, order_log):
        order = order_in_status(service, OrderStatus.PREPARING)
        pancakes_before = service.get_order_status(order.id).pancakes

        delivered = service.deliver_order(order.id)

        assert delivered.status == "DELIVERED"
        assert delivered.pancakes == pancakes_before
        assert all(p.order_id == order.id for p in delivered.pancakes)
        assert service.view_order(order.id) == []
        assert service.get_pancake_descriptions(order.id) == []
        assert service.list_orders_with_status("DELIVERED") == {order.id}
        assert service.get_order_status(order.id).pancakes == ()
        assert order_log.get_last_log().endswith(f"[DELIVER] Order {order.id}")

    def test_deliver_requires_preparing(self, service):
        order = order_in_status(service, OrderStatus.COMPLETED)
        with pytest.raises(InvalidStateError, match="must be PREPARING"):
            service.deliver_order(order.id)
        assert service.get_order_status(order.id).status == "COMPLETED"

    @pytest.mark.parametrize("status", [OrderStatus.NEW, OrderStatus.COMPLETED])
    def test_cancel(self, service, order_log, status):
        order = order_in_status(service, status)
        service.cancel_order(order.id)
        assert service.list_orders_with_status(OrderStatus.CANCELLED) == {order.id}
        assert service.list_orders_with_status(status) == set()
        assert service.view_order(order.id) == []
        assert service.count_finished_orders() == 1
        assert order_log.get_last_log().endswith(f"[STATUS] Order {order.id} Cancelled -> CANCELLED")

    @pytest.mark.parametrize("status", [OrderStatus.PREPARING, OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_cancel_not_allowed(self, service, order_log, status):
        order = order_in_status(service, status)
        with pytest.raises(InvalidStateError, match="Can only cancel"):
            service.cancel_order(order.id)
        assert "[ERROR] Invalid Cancelled" in order_log.get_last_log()
        assert service.list_orders_with_status(status) == {order.id}

    @pytest.mark.parametrize(
        "operation", ["complete_order", "prepare_order", "deliver_order", "cancel_order"]
    )
    def test_unknown_order(self, service, operation):
        with pytest.raises(OrderNotFoundError):
            getattr(service, operation)(uuid.uuid4())

    def test_clear_all_finished_orders(self, service):
        delivered = order_in_status(service, OrderStatus.DELIVERED)
        cancelled = order_in_status(service, OrderStatus.CANCELLED)
        active = order_in_status(service, OrderStatus.NEW)

        service.clear_all_finished_orders()
        service.clear_all_finished_orders()

        assert service.count_finished_orders() == 0
        for order in (delivered, cancelled):
            with pytest.raises(OrderNotFoundError):
                service.get_order_status(order.id)
        assert service.get_order_status(active.id).status == "NEW"


class TestQueries:
    """Tests for the read side."""

    def test_get_order_status_unknown(self, service):
        missing = uuid.uuid4()
        with pytest.raises(OrderNotFoundError) as exc_info:
            service.get_order_status(missing)
        assert str(missing) in str(exc_info.value)
        assert "not found" in str(exc_info.value)
        assert isinstance(exc_info.value, DomainArgumentError)

    def test_reads_of_unknown_orders_are_empty(self, service):
        missing = uuid.uuid4()
        assert service.view_order(missing) == []
        assert service.get_pancake_descriptions(missing) == []

    def test_returned_snapshots_do_not_change(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        snapshot = service.get_order_status(new_order.id)
        view = service.view_order(new_order.id)
        pancakes = service.get_pancake_descriptions(new_order.id)

        service.add_pancakes(new_order.id, [HAZELNUTS], 1)
        service.complete_order(new_order.id)

        assert snapshot.status == "NEW"
        assert len(snapshot.pancakes) == 1
        assert view == ["Delicious pancake with dark chocolate!"]
        assert len(pancakes) == 1

    def test_mutating_returned_list_does_not_touch_order(self, service, new_order):
        service.add_pancakes(new_order.id, [DARK_CHOCOLATE], 1)
        service.view_order(new_order.id).clear()
        service.get_pancake_descriptions(new_order.id).clear()
        assert len(service.view_order(new_order.id)) == 1

    def test_list_orders_with_status_spans_registries(self, service):
        new = order_in_status(service, OrderStatus.NEW)
        preparing = order_in_status(service, OrderStatus.PREPARING)
        delivered = order_in_status(service, OrderStatus.DELIVERED)
        assert service.list_orders_with_status("new") == {new.id}
        assert service.list_orders_with_status(OrderStatus.PREPARING) == {preparing.id}
        assert service.list_orders_with_status(OrderStatus.DELIVERED) == {delivered.id}

    def test_list_orders_with_unknown_status(self, service):
        with pytest.raises(UnknownOrderStatusError):
            service.list_orders_with_status("EATEN")


class TestOrderLoggerCollaborator:
    """Tests that the service talks to any OrderLogger implementation."""

    def test_events_reach_a_custom_logger(self):
        sink = Mock(spec=OrderLogger)
        service = OrderService(sink)

        order = service.create_order(1, 1)
        service.add_pancakes(order.id, [DARK_CHOCOLATE], 2)
        service.complete_order(order.id)
        service.prepare_order(order.id)
        service.deliver_order(order.id)

        sink.log_order_created.assert_called_once()
        assert sink.log_pancake_added.call_count == 2
        assert [c.args[1] for c in sink.log_order_status_change.call_args_list] == [
            "Completed",
            "Preparing",
        ]
        sink.log_order_delivered.assert_called_once()
        sink.log_invalid_transition.assert_not_called()
