"""Car URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.cars.views import AdminCarViewSet, CarViewSet

router = DefaultRouter(trailing_slash=True)
router.register("cars", CarViewSet, basename="car")
router.register("admin/cars", AdminCarViewSet, basename="admin-car")

urlpatterns = router.urls
