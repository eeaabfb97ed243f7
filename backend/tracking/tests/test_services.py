from datetime import timedelta
from unittest import mock

from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from common.tests.factories import make_company, make_order
from tracking.models import Order, OrderStatus, StatusHistoryEntry
from tracking.services import INITIAL_HISTORY_NOTE, OrderIngestionService, OrderNotFound, track_order
from tracking.types import NewOrder, StatusChange


class RecordingScheduler:
    def __init__(self):
        self.calls = []

    def tracking_activated(self, order_id):
        self.calls.append(("tracking_activated", order_id))

    def status_update(self, order_id, new_status, note=None):
        self.calls.append(("status_update", order_id, new_status, note))


def new_order(external_order_id="ORD-1", **kwargs):
    fields = {
        "external_order_id": external_order_id,
        "customer_email": "ada@example.com",
        "item_summary": "2x Coffee Mug",
        "delivery_address": "1 Main St, Springfield",
    }
    fields.update(kwargs)
    return NewOrder(**fields)


class CreateOrderTest(TestCase):

    def setUp(self):
        self.company = make_company()
        self.scheduler = RecordingScheduler()
        self.service = OrderIngestionService(self.scheduler)

    def test_creates_order_with_initial_history(self):
        result = self.service.create_order(self.company.id, new_order())

        self.assertTrue(result.created)
        self.assertEqual(result.status, OrderStatus.PENDING)
        order = Order.objects.get(id=result.order_id)
        history = list(order.status_history.all())
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0].status, OrderStatus.PENDING)
        self.assertEqual(history[0].note, INITIAL_HISTORY_NOTE)
        self.assertEqual(self.scheduler.calls, [("tracking_activated", order.id)])

    def test_initial_status_is_honoured(self):
        result = self.service.create_order(self.company.id, new_order(initial_status=OrderStatus.IN_TRANSIT))
        self.assertEqual(result.status, OrderStatus.IN_TRANSIT)
        self.assertEqual(
            StatusHistoryEntry.objects.get(order_id=result.order_id).status, OrderStatus.IN_TRANSIT
        )

    def test_repeat_returns_existing_without_side_effects(self):
        first = self.service.create_order(self.company.id, new_order())
        second = self.service.create_order(self.company.id, new_order(item_summary="changed"))

        self.assertFalse(second.created)
        self.assertEqual(second.order_id, first.order_id)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(StatusHistoryEntry.objects.count(), 1)
        self.assertEqual(Order.objects.get().item_summary, "2x Coffee Mug")
        self.assertEqual(len(self.scheduler.calls), 1)

    def test_same_external_id_under_another_company_is_separate(self):
        other = make_company(secret="other", business_email="ops@other.test")
        a = self.service.create_order(self.company.id, new_order())
        b = self.service.create_order(other.id, new_order())
        self.assertTrue(b.created)
        self.assertNotEqual(a.order_id, b.order_id)

    def test_losing_a_concurrent_insert_returns_the_winner(self):
        winner = make_order(self.company)
        with mock.patch.object(OrderIngestionService, "_find", side_effect=[None, winner]):
            result = self.service.create_order(self.company.id, new_order())

        self.assertFalse(result.created)
        self.assertEqual(result.order_id, winner.id)
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(StatusHistoryEntry.objects.count(), 1)
        self.assertEqual(self.scheduler.calls, [])

    def test_integrity_error_without_a_row_is_raised(self):
        make_order(self.company)
        with mock.patch.object(OrderIngestionService, "_find", side_effect=[None, None]):
            with self.assertRaises(IntegrityError):
                self.service.create_order(self.company.id, new_order())


class UpdateStatusTest(TestCase):

    def setUp(self):
        self.company = make_company()
        self.order = make_order(self.company)
        self.scheduler = RecordingScheduler()
        self.service = OrderIngestionService(self.scheduler)

    def test_transition_appends_history_and_notifies(self):
        result = self.service.update_status(
            self.company.id, StatusChange("ORD-1", OrderStatus.IN_TRANSIT, "Left the warehouse")
        )

        self.assertTrue(result.changed)
        self.assertEqual(result.previous_status, OrderStatus.PENDING)
        self.assertEqual(result.new_status, OrderStatus.IN_TRANSIT)
        self.order.refresh_from_db()
        self.assertEqual(self.order.current_status, OrderStatus.IN_TRANSIT)

        latest = self.order.status_history.last()
        self.assertEqual(latest.status, OrderStatus.IN_TRANSIT)
        self.assertEqual(latest.note, "Left the warehouse")
        self.assertEqual(
            self.scheduler.calls,
            [("status_update", self.order.id, OrderStatus.IN_TRANSIT, "Left the warehouse")],
        )

    def test_same_status_is_a_noop(self):
        result = self.service.update_status(self.company.id, StatusChange("ORD-1", OrderStatus.PENDING))

        self.assertFalse(result.changed)
        self.assertEqual(result.new_status, OrderStatus.PENDING)
        self.assertIsNone(result.previous_status)
        self.assertEqual(self.order.status_history.count(), 1)
        self.assertEqual(self.scheduler.calls, [])

    def test_backwards_transition_is_accepted(self):
        self.service.update_status(self.company.id, StatusChange("ORD-1", OrderStatus.DELIVERED))
        result = self.service.update_status(self.company.id, StatusChange("ORD-1", OrderStatus.IN_TRANSIT))
        self.assertTrue(result.changed)
        self.assertEqual(result.previous_status, OrderStatus.DELIVERED)

    def test_latest_history_always_matches_current_status(self):
        for status in (OrderStatus.IN_TRANSIT, OrderStatus.IN_TRANSIT, OrderStatus.OUT_FOR_DELIVERY):
            self.service.update_status(self.company.id, StatusChange("ORD-1", status))
            self.order.refresh_from_db()
            self.assertEqual(self.order.status_history.last().status, self.order.current_status)
        self.assertEqual(self.order.status_history.count(), 3)

    def test_history_timestamp_comes_from_the_database(self):
        skewed = timezone.now() - timedelta(days=1)
        with mock.patch("django.utils.timezone.now", return_value=skewed):
            self.service.update_status(self.company.id, StatusChange("ORD-1", OrderStatus.IN_TRANSIT))

        latest = self.order.status_history.last()
        self.assertEqual(latest.status, OrderStatus.IN_TRANSIT)
        self.assertGreater(latest.timestamp, skewed + timedelta(hours=1))

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound) as ctx:
            self.service.update_status(self.company.id, StatusChange("ORD-404", OrderStatus.DELIVERED))
        self.assertEqual(str(ctx.exception), "Order ORD-404 not found")

    def test_order_of_another_company_is_not_found(self):
        other = make_company(secret="other", business_email="ops@other.test")
        with self.assertRaises(OrderNotFound):
            self.service.update_status(other.id, StatusChange("ORD-1", OrderStatus.DELIVERED))


class TrackOrderTest(TestCase):

    def setUp(self):
        self.company = make_company()
        self.order = make_order(self.company)
        OrderIngestionService(RecordingScheduler()).update_status(
            self.company.id, StatusChange("ORD-1", OrderStatus.IN_TRANSIT, "On its way")
        )

    def test_timeline_is_newest_first(self):
        data = track_order("ADA@example.com", "ORD-1")

        self.assertEqual(data["orderId"], "ORD-1")
        self.assertEqual(data["currentStatus"], OrderStatus.IN_TRANSIT)
        self.assertEqual(data["merchant"], "Acme Ltd")
        self.assertEqual([t["status"] for t in data["timeline"]], ["IN_TRANSIT", "PENDING"])
        self.assertEqual(data["timeline"][0]["note"], "On its way")

    def test_wrong_email_is_not_found(self):
        with self.assertRaises(Order.DoesNotExist):
            track_order("eve@example.com", "ORD-1")
