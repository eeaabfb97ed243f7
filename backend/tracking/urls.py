from django.urls import path

from .views import TrackOrderView

urlpatterns = [
    path("track/<str:email>/<str:external_order_id>/", TrackOrderView.as_view(), name="track-order"),
]
