from django.contrib import admin
from .models import Order, OrderItem, OrderNumberSequence


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "quantity", "unit_price", "subtotal", "status", "notes")
    readonly_fields = ("unit_price", "subtotal")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly admin for orders. Totals are derived from the items and are
    never edited here.
    """

    list_display = (
        "order_number",
        "status",
        "table",
        "user",
        "get_total_formatted",
        "created_at",
        "closed_at",
    )
    list_display_links = ("order_number",)
    list_filter = ("status", "created_at")
    search_fields = ("order_number", "notes", "table__table_number", "user__email")
    readonly_fields = (
        "id",
        "order_number",
        "subtotal",
        "tax",
        "total",
        "closed_at",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("table", "user")

    @admin.display(ordering="total", description="Total")
    def get_total_formatted(self, obj):
        return f"${obj.total:,.2f}"


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("id", "get_order_number", "product", "quantity", "unit_price", "subtotal", "status")
    list_filter = ("status", "order__status")
    search_fields = ("order__order_number", "product__name")
    readonly_fields = ("unit_price", "subtotal")
    list_per_page = 50

    @admin.display(ordering="order__order_number", description="Order Number")
    def get_order_number(self, obj):
        return obj.order.order_number


@admin.register(OrderNumberSequence)
class OrderNumberSequenceAdmin(admin.ModelAdmin):
    list_display = ("day", "last_value")
