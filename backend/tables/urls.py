from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import DiningTableViewSet

router = DefaultRouter()
router.register(r"tables", DiningTableViewSet, basename="table")

urlpatterns = [
    path("", include(router.urls)),
]
