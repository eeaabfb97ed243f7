from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from common.tests.factories import make_company, make_order


class TrackOrderViewTest(APITestCase):

    def setUp(self):
        self.order = make_order(make_company())

    def test_lookup(self):
        url = reverse("track-order", kwargs={"email": "ada@example.com", "external_order_id": "ORD-1"})
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["orderId"], "ORD-1")
        self.assertEqual(response.data["currentStatus"], "PENDING")
        self.assertEqual(len(response.data["timeline"]), 1)
        self.assertNotIn("customerEmail", response.data)

    def test_lookup_needs_no_webhook_secret(self):
        url = reverse("track-order", kwargs={"email": "ada@example.com", "external_order_id": "ORD-1"})
        response = self.client.get(url, HTTP_X_WEBHOOK_SECRET="whatever")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_unknown_order_is_404(self):
        url = reverse("track-order", kwargs={"email": "ada@example.com", "external_order_id": "ORD-2"})
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(
            response.data, {"success": False, "statusCode": 404, "message": "Order not found"}
        )
