from django.contrib import admin
from .models import DiningTable


@admin.register(DiningTable)
class DiningTableAdmin(admin.ModelAdmin):
    list_display = ("table_number", "capacity", "status", "is_active")
    list_filter = ("status", "is_active")
    search_fields = ("table_number",)
